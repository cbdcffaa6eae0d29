"""Guest locale catalogue offered to hosts.

Most entries are plain BCP-47 tags. ``en-US-west`` and ``en-US-east`` are
regional pseudo-locales: they only steer phrasing in the prompt and resolve
to ``en-US`` everywhere a real tag is needed.
"""

from __future__ import annotations

from dataclasses import dataclass

from hostlingo.services.language.tags import normalize_tag


@dataclass(frozen=True)
class GuestLocale:
    code: str
    label: str
    lang: str


GUEST_LOCALES: tuple[GuestLocale, ...] = (
    GuestLocale("en-US-west", "English — US West Coast", "en-US"),
    GuestLocale("en-US-east", "English — US East Coast", "en-US"),
    GuestLocale("en-AU", "English — Australia", "en-AU"),
    GuestLocale("en-NZ", "English — New Zealand", "en-NZ"),
    GuestLocale("de-DE", "Deutsch (DE)", "de-DE"),
    GuestLocale("de-CH", "Schweizer Hochdeutsch (CH)", "de-CH"),
    GuestLocale("fr-FR", "Français", "fr-FR"),
    GuestLocale("it-IT", "Italiano", "it-IT"),
    GuestLocale("es-ES", "Español", "es-ES"),
    GuestLocale("zh-Hant", "繁體中文", "zh-Hant"),
    GuestLocale("zh-Hans", "简体中文", "zh-Hans"),
    GuestLocale("ko-KR", "한국어", "ko-KR"),
)

_BY_CODE = {locale.code.lower(): locale for locale in GUEST_LOCALES}


def find_locale(code: str | None) -> GuestLocale | None:
    if not code:
        return None
    return _BY_CODE.get(code.strip().lower())


def resolve_locale(code: str | None) -> tuple[str, str] | None:
    """Map a catalogue code or BCP-47 tag to ``(locale, tag)``.

    The locale keeps pseudo-locale detail for prompt guidance, the tag is
    the real language tag. Returns None for anything unrecognised.
    """
    locale = find_locale(code)
    if locale is not None:
        return locale.code, locale.lang
    tag = normalize_tag(code)
    if tag is None:
        return None
    return tag, tag
