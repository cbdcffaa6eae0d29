"""Prompt assembly for guest and host translations.

Tone and locale guidance are plain sentences appended to the user prompt.
Empty guidance lines are dropped.
"""

from __future__ import annotations

from hostlingo.services.language.tags import display_name, is_undetermined

TONES = ("neutral", "formal", "casual")

_TONE_RULES = {
    "formal": (
        "Polite and businesslike. Avoid ambiguity and use honorifics and "
        "respectful forms where the language has them. No emoji or slang."
    ),
    "casual": (
        "Short and friendly. Use everyday spoken phrasing in moderation and "
        "avoid long sentences. Keep emoji and slang to a minimum."
    ),
    "neutral": "Neutral, courteous standard register.",
}

_REGIONAL_RULES = {
    "en-US-west": "Prefer phrasing that sounds natural on the US West Coast (relaxed and friendly).",
    "en-US-east": "Prefer phrasing that sounds natural on the US East Coast (a little more buttoned-up).",
}

_LOCALE_HINTS = {
    "zh-Hant": "Write in Traditional Chinese as read naturally in Taiwan and Hong Kong.",
    "zh-Hans": "Write in Simplified Chinese as read naturally in mainland China.",
    "de-CH": "Write in Swiss Standard German (use ss, never ß).",
    "en-AU": "Use natural Australian English expressions and spelling.",
    "en-NZ": "Use natural New Zealand English expressions and spelling.",
}

GUEST_SYSTEM_PROMPT = (
    "You are the multilingual front desk of a hotel or vacation rental. "
    "Translate the guest's message faithfully, keeping the guest's level of "
    "politeness, into natural {host_language}."
)

HOST_SYSTEM_PROMPT = (
    "You are a multilingual concierge for a vacation rental host. "
    "Return a natural translation of the host's reply without changing its meaning."
)


def tone_rule(tone: str, locale: str | None) -> str:
    """Style guidance for ``tone``, plus US regional phrasing when relevant."""
    base = _TONE_RULES.get(tone, _TONE_RULES["neutral"])
    regional = _REGIONAL_RULES.get(locale or "", "")
    return f"{base} {regional}".strip()


def locale_hint(locale: str | None) -> str:
    return _LOCALE_HINTS.get(locale or "", "")


def build_guest_prompt(text: str, source_lang: str | None, host_lang: str) -> tuple[str, str]:
    """System and user prompts for an inbound guest message."""
    host_language = display_name(host_lang)
    lines = []
    if source_lang and not is_undetermined(source_lang):
        lines.append(f"The guest wrote in {display_name(source_lang)}.")
    lines.append(f"Original message:\n{text}")
    lines.append(f"\nOutput: {host_language} only.")
    return GUEST_SYSTEM_PROMPT.format(host_language=host_language), "\n".join(lines)


def build_host_prompt(
    text: str,
    target_locale: str,
    target_lang: str,
    tone: str,
    source_lang: str | None = None,
    guest_lang: str | None = None,
) -> tuple[str, str]:
    """System and user prompts for the host's reply to a guest."""
    lines = [
        f"Target language: {display_name(target_lang)}",
        f"Style guide: {tone_rule(tone, target_locale)}",
    ]
    hint = locale_hint(target_locale)
    if hint:
        lines.append(f"Language/region guide: {hint}")
    if guest_lang and not is_undetermined(guest_lang):
        lines.append(f"Reference: the guest originally wrote in {display_name(guest_lang)}.")
    source = display_name(source_lang) if source_lang else "the host's language"
    lines.append(f"Original reply ({source}):\n{text}")
    lines.append(f"\nOutput: {display_name(target_lang)} only.")
    return HOST_SYSTEM_PROMPT, "\n".join(lines)


def build_retry_prompt(text: str, previous_output: str, target_lang: str) -> tuple[str, str]:
    """Stricter prompt used for the single re-translation attempt."""
    language = display_name(target_lang)
    system_prompt = (
        f"You translate into {language}. "
        f"Your entire answer must be written in {language}. "
        "Do not add notes, romanization or the original text."
    )
    user_prompt = (
        f"The previous translation was not written in {language}:\n"
        f"{previous_output}\n\n"
        f"Translate the original message again.\n"
        f"Original message:\n{text}\n\n"
        f"Output: {language} only."
    )
    return system_prompt, user_prompt
