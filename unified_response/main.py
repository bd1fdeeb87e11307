from dotenv import load_dotenv
from fastapi import FastAPI

from unified_response import __version__
from unified_response.api.exception_handlers import register_exception_handlers
from unified_response.api.responder import Responder
from unified_response.core.config import ResponseSettings, get_settings
from unified_response.logging import RequestIdMiddleware, configure_logging, get_logger

load_dotenv()
configure_logging()
logger = get_logger()


def create_app(settings: ResponseSettings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Unified Response",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )

    app.state.settings = settings
    app.state.responder = Responder(settings)

    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    logger.info(
        "application_configured",
        is_restful=settings.is_restful,
        is_unified_return_json=settings.is_unified_return_json,
        collection_field=settings.format.collection_field,
    )
    return app


app = create_app()
