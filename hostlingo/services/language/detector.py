"""LLM-backed language detection.

A single short LLM call that returns the BCP-47 tag of a message.
Upstream failures propagate to the caller; only unreadable model output
is absorbed (as ``und``).
"""

from __future__ import annotations

import structlog

from hostlingo.services.language.tags import (
    UNDETERMINED,
    is_known_language,
    normalize_tag,
)
from hostlingo.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)


DETECTION_SYSTEM_PROMPT = (
    "You are a precise language identifier. "
    "Reply with exactly one BCP-47 language tag such as en, fr, pt-BR, zh-Hant or ja. "
    "No explanation. No punctuation."
)

DETECTION_PROMPT = """
Identify the language of the message below.
Include a script subtag only for Chinese (zh-Hans or zh-Hant).
If the language cannot be determined, reply "und".

Message:
\"\"\"{message}\"\"\"
"""


class LanguageDetector:
    """Detects the language of guest and host messages."""

    def __init__(self, llm: LLMProvider, model: str | None = None) -> None:
        self._llm = llm
        self._model = model

    @staticmethod
    def _parse_tag(raw: str) -> str:
        """Parse detector output into a canonical tag.

        Models sometimes wrap the tag in quotes or backticks, or add a
        trailing period; only the first token is considered. It must name a
        known language, so a chatty reply ("The message is in French.")
        reads as ``und`` rather than as the tag ``the``.
        """
        tokens = raw.strip().split()
        if not tokens:
            return UNDETERMINED
        cleaned = tokens[0].strip("`\"'.,:;!?()[]{}")
        # Sentence-initial words are capitalised; tags followed by a gloss are not.
        if len(tokens) > 1 and not cleaned.split("-", 1)[0].islower():
            return UNDETERMINED
        tag = normalize_tag(cleaned)
        if tag is None or not is_known_language(tag):
            return UNDETERMINED
        return tag

    async def detect(self, text: str) -> str:
        """Return the BCP-47 tag of ``text``, or ``und``.

        Raises:
            UpstreamLLMError: If the LLM call fails.
        """
        result = await self._llm.generate(
            prompt=DETECTION_PROMPT.format(message=text),
            system_prompt=DETECTION_SYSTEM_PROMPT,
            max_tokens=10,
            temperature=0.0,
            model=self._model,
        )
        tag = self._parse_tag(result.text)
        if tag == UNDETERMINED:
            logger.warning(
                "language_detection_unexpected_output",
                raw_response=result.text.strip()[:32],
                message_len=len(text),
            )
        else:
            logger.debug("language_detected", lang=tag, message_len=len(text))
        return tag
