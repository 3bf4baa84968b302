from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
import logging

from arya.models.assistant import AssistantErrorResponse, AssistantRequest, AssistantResponse
from arya.services.assistant_service import AryaAssistant

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_ERROR = "Sorry, I encountered an error. Please try again."

def get_assistant(request: Request) -> AryaAssistant:
    return request.app.state.assistant

@router.post("", response_model=AssistantResponse, response_model_exclude_none=True)
async def ask_assistant(request: Request, assistant: AryaAssistant = Depends(get_assistant)):
    # malformed or invalid bodies end in the same 500 reply
    try:
        body = AssistantRequest.model_validate(await request.json())
        logger.info(
            f"Assistant request: message length {len(body.message)}, "
            f"location {'provided' if body.user_location else 'missing'}, "
            f"history {len(body.conversation_history)}"
        )
        return await run_in_threadpool(assistant.respond, body)

    except Exception:
        logger.exception("Assistant API error")
        error = AssistantErrorResponse(message=GENERIC_ERROR, actions=[])
        return JSONResponse(status_code=500, content=error.model_dump(by_alias=True))
