from fastapi import APIRouter, Depends, HTTPException, Query, Request
import logging

from arya.services.builder_service import BuilderContentService

logger = logging.getLogger(__name__)

router = APIRouter()

def get_cms(request: Request) -> BuilderContentService:
    return request.app.state.cms

@router.get("/faqs")
def get_faqs(cms: BuilderContentService = Depends(get_cms)):
    faqs = cms.get_faqs()
    return {"faqs": faqs, "count": len(faqs)}

@router.get("/page")
def get_page(path: str = Query(..., min_length=1), cms: BuilderContentService = Depends(get_cms)):
    page = cms.get_page(path)
    if page is None:
        raise HTTPException(status_code=404, detail=f"No page found for '{path}'")
    return page

@router.get("/{model}")
def get_content(model: str, limit: int = Query(50, ge=1, le=100), offset: int = Query(0, ge=0),
                cms: BuilderContentService = Depends(get_cms)):
    results = cms.get_content(model, limit=limit, offset=offset)
    logger.info(f"Content API: {len(results)} '{model}' entries")
    return {"results": results, "count": len(results)}
