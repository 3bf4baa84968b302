import json, logging, requests
from typing import Any, Dict, List, Optional

from arya.config.settings import Settings

logger = logging.getLogger(__name__)

class BuilderContentService:
    """
    Read-only access to Builder.io CMS content.
    Without an API key every lookup returns empty content instead of failing.
    """

    def __init__(self, settings: Settings):
        self.api_key = settings.BUILDER_API_KEY
        self.api_url = settings.BUILDER_API_URL
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def get_content(self, model: str, query: Optional[Dict[str, Any]] = None,
                    limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        if not self.configured:
            logger.warning("BuilderContentService: BUILDER_API_KEY not configured, returning no content")
            return []

        params = {"apiKey": self.api_key, "limit": limit, "offset": offset}
        if query:
            params["query"] = json.dumps(query)

        try:
            response = requests.get(f"{self.api_url}/content/{model}", params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json().get("results") or []
        except Exception as e:
            logger.error(f"BuilderContentService: failed to fetch '{model}' content: {e}")
            return []

    def get_page(self, path: str) -> Optional[Dict[str, Any]]:
        if not self.configured:
            logger.warning("BuilderContentService: BUILDER_API_KEY not configured")
            return None

        try:
            response = requests.get(
                f"{self.api_url}/pages/page",
                params={"apiKey": self.api_key, "url": path},
                timeout=self.timeout
            )
            if not response.ok:
                return None
            return response.json().get("data")
        except Exception as e:
            logger.error(f"BuilderContentService: failed to fetch page '{path}': {e}")
            return None

    def get_faqs(self) -> List[Dict[str, str]]:
        return [
            {
                "id": item.get("id", ""),
                "question": (item.get("data") or {}).get("title", ""),
                "answer": (item.get("data") or {}).get("content", ""),
            }
            for item in self.get_content("faq")
        ]
