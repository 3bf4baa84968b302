from pydantic_settings import BaseSettings
from typing import Optional

GEMINI_KEY_PLACEHOLDER = "your-gemini-api-key"

class Settings(BaseSettings):
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    RESPONSE_TEMPERATURE: float = 0.7
    MAX_RESPONSE_TOKENS: int = 800

    OCM_API_KEY: Optional[str] = None
    OCM_BASE_URL: str = "https://api.openchargemap.io/v3"

    OPEN_METEO_URL: str = "https://api.open-meteo.com/v1/forecast"
    OSRM_URL: str = "https://router.project-osrm.org"
    NOMINATIM_USER_AGENT: str = "ARYA/1.0"
    MAPBOX_ACCESS_TOKEN: Optional[str] = None

    BUILDER_API_KEY: Optional[str] = None
    BUILDER_API_URL: str = "https://cdn.builder.io/api/v3"

    # applies to every outbound call
    REQUEST_TIMEOUT_SECONDS: float = 12.0

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app.log"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def gemini_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY) and self.GEMINI_API_KEY != GEMINI_KEY_PLACEHOLDER

    @property
    def map_configured(self) -> bool:
        return bool(self.MAPBOX_ACCESS_TOKEN)

    @property
    def cms_configured(self) -> bool:
        return bool(self.BUILDER_API_KEY)

settings = Settings()
