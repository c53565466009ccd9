"""FastAPI application entrypoint."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

# Project root (parent of bridge_app/)
_ROOT = Path(__file__).resolve().parent.parent

# Load .env FIRST so API_KEY, ALLOWED_ORIGINS, etc. are set before settings are read
from dotenv import load_dotenv
load_dotenv(_ROOT / ".env")

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bridge_app.api.routes import router
from bridge_app.core.config import Settings, get_settings
from browser_tools import CATALOG, BrowserSession, Dispatcher

_log = logging.getLogger(__name__)


def build_dispatcher(settings: Settings) -> Dispatcher:
    session = BrowserSession(headless=settings.browser_headless)
    return Dispatcher(session, CATALOG.without(settings.disabled_tools))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not app.state.settings.api_key:
        _log.warning("API_KEY not set. Authentication is disabled.")
    yield
    # Close the browser on shutdown (uvicorn handles SIGINT/SIGTERM)
    app.state.dispatcher.session.close()


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


def create_app(settings: Settings | None = None, dispatcher: Dispatcher | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.service_name,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher or build_dispatcher(settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-API-Key"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(router)
    return app


# For `uvicorn bridge_app.main:app`; server.py and cli.py build their own
app = create_app()
