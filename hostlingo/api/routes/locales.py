"""Guest locale catalogue endpoint."""

from fastapi import APIRouter

from hostlingo.schemas.translate import LocaleItem, LocalesResponse
from hostlingo.services.language.locales import GUEST_LOCALES

router = APIRouter(prefix="/locales", tags=["translate"])


@router.get("", response_model=LocalesResponse)
async def list_locales() -> LocalesResponse:
    """Locales a host can pick as the reply target."""
    return LocalesResponse(
        locales=[
            LocaleItem(code=locale.code, label=locale.label, lang=locale.lang)
            for locale in GUEST_LOCALES
        ]
    )
