"""BCP-47 language tag helpers.

Only the subset of BCP-47 that shows up in chat messages is supported:
language, optional script, optional region, optional variants.
Extensions and private-use subtags are rejected.
"""

from __future__ import annotations

import re

UNDETERMINED = "und"

_TAG_RE = re.compile(
    r"""^
    (?P<lang>[a-z]{2,3})
    (?:-(?P<script>[a-z]{4}))?
    (?:-(?P<region>[a-z]{2}|\d{3}))?
    (?P<variants>(?:-(?:[a-z0-9]{5,8}|\d[a-z0-9]{3}))*)
    $""",
    re.IGNORECASE | re.VERBOSE,
)

LANGUAGE_NAMES: dict[str, str] = {
    "ar": "Arabic",
    "bg": "Bulgarian",
    "bn": "Bengali",
    "ca": "Catalan",
    "cs": "Czech",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "et": "Estonian",
    "fa": "Persian",
    "fi": "Finnish",
    "fil": "Filipino",
    "fr": "French",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "id": "Indonesian",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "ms": "Malay",
    "nb": "Norwegian Bokmål",
    "nl": "Dutch",
    "pl": "Polish",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "sk": "Slovak",
    "sl": "Slovenian",
    "sr": "Serbian",
    "sv": "Swedish",
    "sw": "Swahili",
    "ta": "Tamil",
    "th": "Thai",
    "tl": "Tagalog",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "vi": "Vietnamese",
    "zh": "Chinese",
}

_SCRIPT_NAMES = {
    "Hans": "Simplified",
    "Hant": "Traditional",
}


def normalize_tag(raw: str | None) -> str | None:
    """Return the canonical casing of a BCP-47 tag, or None if it is not one.

    ``EN_us`` -> ``en-US``, ``zh-hant`` -> ``zh-Hant``.
    """
    if not raw:
        return None
    candidate = raw.strip().replace("_", "-")
    match = _TAG_RE.match(candidate)
    if match is None:
        return None
    parts = [match.group("lang").lower()]
    if match.group("script"):
        parts.append(match.group("script").title())
    if match.group("region"):
        parts.append(match.group("region").upper())
    variants = match.group("variants")
    if variants:
        parts.extend(v.lower() for v in variants.strip("-").split("-"))
    return "-".join(parts)


def primary_subtag(tag: str) -> str:
    """``pt-BR`` -> ``pt``."""
    return tag.split("-", 1)[0].lower()


def same_language(a: str | None, b: str | None) -> bool:
    """True when both tags name the same primary language."""
    if not a or not b:
        return False
    return primary_subtag(a) == primary_subtag(b)


def is_undetermined(tag: str | None) -> bool:
    return tag is None or primary_subtag(tag) == UNDETERMINED


def is_known_language(tag: str | None) -> bool:
    """True when the primary subtag is one of LANGUAGE_NAMES."""
    return bool(tag) and primary_subtag(tag) in LANGUAGE_NAMES


def display_name(tag: str) -> str:
    """Human-readable language name used inside prompts."""
    name = LANGUAGE_NAMES.get(primary_subtag(tag))
    if name is None:
        return tag
    for subtag in tag.split("-")[1:]:
        if subtag in _SCRIPT_NAMES:
            return f"{_SCRIPT_NAMES[subtag]} {name}"
    return f"{name} ({tag})" if "-" in tag else name
