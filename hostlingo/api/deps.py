"""Shared FastAPI dependencies: request body parsing and service injection.

The OpenAIProvider is created once during the FastAPI lifespan and stored on
app.state. All downstream code retrieves it via Depends(), never by direct
import. When no API key is configured the provider is absent and any route
that needs it fails with MissingAPIKeyError.
"""

from fastapi import Depends, Request
from pydantic import ValidationError

from hostlingo.core.config import settings
from hostlingo.core.exceptions import (
    InvalidJSONError,
    InvalidRequestError,
    MissingAPIKeyError,
)
from hostlingo.schemas.translate import TranslateRequest
from hostlingo.services.language.detector import LanguageDetector
from hostlingo.services.llm.base import LLMProvider
from hostlingo.services.translation.service import TranslationService


def _describe_validation_error(exc: ValidationError) -> str:
    """First validation error as ``field: message``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{field}: {message}" if field else message


async def get_translate_request(request: Request) -> TranslateRequest:
    """Parse and validate the POST /api/translate body.

    Done by hand rather than as a typed body parameter so malformed input
    yields 400 with the ``{ok: false, error}`` contract instead of 422.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidJSONError("Malformed JSON body") from e
    if not isinstance(payload, dict):
        raise InvalidJSONError()
    try:
        return TranslateRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestError(_describe_validation_error(e)) from e


def get_llm_provider(request: Request) -> LLMProvider:
    """Return the singleton LLM provider from app.state."""
    provider = getattr(request.app.state, "llm_provider", None)
    if provider is None:
        raise MissingAPIKeyError()
    return provider


def get_language_detector(
    llm: LLMProvider = Depends(get_llm_provider),
) -> LanguageDetector:
    """Return a LanguageDetector bound to the configured detection model."""
    return LanguageDetector(llm, model=settings.detect_model)


def get_translation_service(
    llm: LLMProvider = Depends(get_llm_provider),
    detector: LanguageDetector = Depends(get_language_detector),
) -> TranslationService:
    """Return a TranslationService instance."""
    return TranslationService(
        llm=llm,
        detector=detector,
        host_lang=settings.host_lang,
        default_guest_lang=settings.default_guest_lang,
        model=settings.translate_model,
    )
