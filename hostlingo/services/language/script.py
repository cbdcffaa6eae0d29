"""Crude script checks for translated output.

Only Japanese has a check. Any other target language passes.
"""

from __future__ import annotations

from hostlingo.services.language.tags import primary_subtag

# Share of Japanese script among letters required before output counts as Japanese.
JAPANESE_MIN_RATIO = 0.3


def _is_kana(ch: str) -> bool:
    code = ord(ch)
    return (
        0x3040 <= code <= 0x309F  # hiragana
        or 0x30A0 <= code <= 0x30FF  # katakana
        or 0x31F0 <= code <= 0x31FF  # katakana phonetic extensions
        or 0xFF66 <= code <= 0xFF9D  # halfwidth katakana
    )


def _is_kanji(ch: str) -> bool:
    code = ord(ch)
    return (
        0x4E00 <= code <= 0x9FFF
        or 0x3400 <= code <= 0x4DBF
        or 0x3005 <= code <= 0x3007  # 々 〆 〇
    )


def japanese_ratio(text: str) -> tuple[int, float]:
    """Return ``(kana_count, ratio)`` where ratio is kana+kanji over all letters."""
    kana = 0
    japanese = 0
    letters = 0
    for ch in text:
        if _is_kana(ch):
            kana += 1
            japanese += 1
            letters += 1
        elif _is_kanji(ch):
            japanese += 1
            letters += 1
        elif ch.isalpha():
            letters += 1
    if letters == 0:
        return 0, 0.0
    return kana, japanese / letters


def looks_japanese(text: str) -> bool:
    kana, ratio = japanese_ratio(text)
    return kana > 0 and ratio >= JAPANESE_MIN_RATIO


def looks_like(text: str, lang: str) -> bool:
    """Heuristic: does ``text`` plausibly read as ``lang``?"""
    if primary_subtag(lang) == "ja":
        return looks_japanese(text)
    return True
