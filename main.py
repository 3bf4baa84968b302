import uvicorn, logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional

from arya.config.settings import Settings, settings
from arya.services.assistant_service import AryaAssistant
from arya.services.builder_service import BuilderContentService
from arya.services.gemini_service import AssistantMode, ModeSelector
from arya.services.mobility_service import MobilityDataProvider
from arya.services.navigation_service import GeocodingService, OSRMRoutingService, WeatherService

from arya.routes.assistant_route import router as assistant_route
from arya.routes.mobility_route import router as mobility_route
from arya.routes.navigation_route import router as navigation_route
from arya.routes.content_route import router as content_route

def configure_logging(app_settings: Settings):
    handlers = [logging.StreamHandler()]
    if app_settings.LOG_FILE:
        handlers.append(logging.FileHandler(app_settings.LOG_FILE))

    logging.basicConfig(
        level=app_settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

configure_logging(settings)
logger = logging.getLogger(__name__)

def create_app(app_settings: Optional[Settings] = None,
               mode: Optional[AssistantMode] = None,
               provider: Optional[MobilityDataProvider] = None) -> FastAPI:
    """
    Build the API. The assistant mode is resolved once here and shared by
    every request; tests pass their own mode and provider.
    """
    app_settings = app_settings or settings
    mode = mode or ModeSelector.resolve(app_settings)
    provider = provider or MobilityDataProvider(app_settings)

    app = FastAPI(
        title="ARYA Mobility API",
        description="AI mobility assistant for Dubai: EV charging, parking, transit, events and heat safety",
        version="1.0.0"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = app_settings
    app.state.provider = provider
    app.state.assistant = AryaAssistant(mode, provider, app_settings)
    app.state.weather = WeatherService(app_settings)
    app.state.geocoder = GeocodingService(app_settings)
    app.state.routing = OSRMRoutingService(app_settings)
    app.state.cms = BuilderContentService(app_settings)

    logger.info(f"ARYA starting in {'AI' if app.state.assistant.uses_ai else 'keyword'} mode")

    # register the routes
    app.include_router(assistant_route, prefix="/assistant")
    app.include_router(mobility_route, prefix="/mobility")
    app.include_router(navigation_route, prefix="/navigation")
    app.include_router(content_route, prefix="/content")

    @app.get("/")
    def root():
        return {
            "message": "ARYA backend is running",
            "features": {
                "ai": app.state.assistant.uses_ai,
                "map": app_settings.map_configured,
                "cms": app_settings.cms_configured,
            }
        }

    return app

app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=9090, log_level="info")
