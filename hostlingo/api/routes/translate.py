"""Translation endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request, Response

from hostlingo.api.deps import get_translate_request, get_translation_service
from hostlingo.core.config import settings
from hostlingo.schemas.translate import TranslateRequest, TranslateResponse
from hostlingo.services.translation.service import TranslationService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/translate", tags=["translate"])


@router.get("")
async def translate_info(request: Request) -> dict:
    """Diagnostics: confirm the route is live and report its configuration."""
    return {
        "ok": True,
        "endpoint": "/api/translate",
        "hostLang": settings.host_lang,
        "model": settings.translate_model,
        "hasApiKey": getattr(request.app.state, "llm_provider", None) is not None,
    }


@router.post("", response_model=TranslateResponse)
async def translate(
    request: Request,
    response: Response,
    body: TranslateRequest = Depends(get_translate_request),
    service: TranslationService = Depends(get_translation_service),
) -> TranslateResponse:
    """Translate a guest message to the host language, or a host reply to the guest's.

    Processing order:
    1. Parse and validate the JSON body (400 on failure)
    2. Resolve the LLM provider (500 when no API key is configured)
    3. TranslationService.translate() with the guest_lang cookie as a hint
    4. Refresh the guest_lang cookie when the guest language is known
    """
    cookie_lang = request.cookies.get(settings.guest_lang_cookie_name)
    result = await service.translate(body, cookie_lang=cookie_lang)

    if result.guest_lang:
        response.set_cookie(
            key=settings.guest_lang_cookie_name,
            value=result.guest_lang,
            max_age=settings.guest_lang_cookie_max_age,
            path="/",
            samesite="lax",
            secure=settings.cookie_secure,
        )

    return TranslateResponse(
        text=result.text,
        role=result.role,
        source_lang=result.source_lang,
        target_lang=result.target_lang,
        target_locale=result.target_locale,
        tone=result.tone,
        retried=result.retried,
    )
