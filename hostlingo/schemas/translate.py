"""Translate request/response schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from hostlingo.core.exceptions import InvalidModeError
from hostlingo.services.language.locales import resolve_locale

Role = Literal["guest", "host"]
Tone = Literal["neutral", "formal", "casual"]

# Legacy ``mode`` values and the role each one implies.
LEGACY_MODES: dict[str, Role] = {
    "to_ja": "guest",
    "from_ja": "host",
}


class TranslateRequest(BaseModel):
    """POST /api/translate request body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str
    role: Role | None = None
    tone: Tone = "neutral"
    guest_lang: str | None = None
    mode: str | None = None
    target_locale: str | None = None
    source_locale: str | None = None

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("text is required")
        return value

    @field_validator("role", "tone", "mode", mode="before")
    @classmethod
    def _blank_as_default(cls, value: object, info: ValidationInfo) -> object:
        if value is None and info.field_name == "tone":
            return "neutral"
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return "neutral" if info.field_name == "tone" else None
            if info.field_name in ("role", "tone"):
                return value.lower()
        return value

    @field_validator("mode")
    @classmethod
    def _known_mode(cls, value: str | None) -> str | None:
        # Raised as-is (not a ValueError) so it keeps its own code and message.
        if value is not None and value not in LEGACY_MODES:
            raise InvalidModeError()
        return value

    @field_validator("guest_lang", "source_locale")
    @classmethod
    def _valid_tag(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        resolved = resolve_locale(value)
        if resolved is None:
            raise ValueError(f"'{value}' is not a valid BCP-47 language tag")
        return resolved[1]

    @field_validator("target_locale")
    @classmethod
    def _valid_locale(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        resolved = resolve_locale(value)
        if resolved is None:
            raise ValueError(f"'{value}' is not a supported locale or language tag")
        return resolved[0]


class TranslateResponse(BaseModel):
    """POST /api/translate success body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    text: str
    role: Role
    source_lang: str | None = None
    target_lang: str
    target_locale: str
    tone: Tone
    retried: bool = False


class LocaleItem(BaseModel):
    code: str
    label: str
    lang: str


class LocalesResponse(BaseModel):
    """GET /api/locales response body."""

    ok: bool = True
    locales: list[LocaleItem]
