"""FastAPI application entrypoint.

All routes prefixed /api. Auto-generated OpenAPI docs at /docs.

The OpenAIProvider is created once during the lifespan (only when an API key
is configured) and stored on app.state for injection via Depends().
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hostlingo.api.routes.locales import router as locales_router
from hostlingo.api.routes.ping import router as ping_router
from hostlingo.api.routes.translate import router as translate_router
from hostlingo.core.config import settings
from hostlingo.core.exceptions import TranslatorError
from hostlingo.services.llm.openai_provider import OpenAIProvider


def _configure_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


_configure_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle.

    Creates the singleton LLM provider and attaches it to app.state.
    Retrieved in request handlers via Depends() in hostlingo/api/deps.py.
    """
    # --- Startup ---
    logger.info("app_startup", env=settings.app_env, host_lang=settings.host_lang)

    if settings.has_api_key:
        app.state.llm_provider = OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.translate_model,
            base_url=settings.openai_base_url,
            timeout_seconds=settings.llm_timeout_seconds,
        )
    else:
        app.state.llm_provider = None
        logger.warning("openai_api_key_missing")

    yield

    # --- Shutdown ---
    logger.info("app_shutdown")


app = FastAPI(
    title="Hostlingo: Host/Guest Translation API",
    description="Translates messages between vacation rental hosts and their guests.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: permissive for development, same-origin only in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if not settings.is_production else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TranslatorError)
async def translator_error_handler(request: Request, exc: TranslatorError) -> JSONResponse:
    """Structured ``{ok: false, error}`` response for all translator exceptions."""
    logger.info(
        "request_failed",
        path=request.url.path,
        code=exc.code,
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    return {"status": "ok"}


api_router = APIRouter(prefix="/api")
api_router.include_router(ping_router)
api_router.include_router(translate_router)
api_router.include_router(locales_router)
app.include_router(api_router)
