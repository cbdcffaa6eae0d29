"""Host/guest translation cycle.

TranslationService.translate() does these things in order:
1. Resolve the role (explicit role, legacy mode, or inferred from detection)
2. Detect the source language when it is not already known
3. Pick the target: host language for guest messages; for host replies the
   first valid of targetLocale, guestLang, the guest_lang cookie, the default
4. Build the prompt and call the LLM once
5. Retry once with a stricter prompt if host-language output fails the
   script check
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import structlog

from hostlingo.schemas.translate import LEGACY_MODES, TranslateRequest
from hostlingo.services.language.detector import LanguageDetector
from hostlingo.services.language.locales import resolve_locale
from hostlingo.services.language.script import looks_like
from hostlingo.services.language.tags import is_undetermined, same_language
from hostlingo.services.llm.base import LLMProvider
from hostlingo.services.translation.prompts import (
    build_guest_prompt,
    build_host_prompt,
    build_retry_prompt,
)

logger = structlog.get_logger(__name__)

_FALLBACK_GUEST_LANG = "en"


@dataclass
class TranslationResult:
    """Output of one translation cycle."""

    text: str
    role: str
    source_lang: str | None
    target_lang: str
    target_locale: str
    tone: str
    retried: bool = False
    guest_lang: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0


def explicit_role(request: TranslateRequest) -> str | None:
    """Role given by the caller, either directly or through a legacy mode."""
    if request.role is not None:
        return request.role
    if request.mode is None:
        return None
    return LEGACY_MODES[request.mode]


class TranslationService:
    """Translates guest messages into the host language and host replies back."""

    def __init__(
        self,
        llm: LLMProvider,
        detector: LanguageDetector,
        host_lang: str = "ja",
        default_guest_lang: str = "en",
        model: str | None = None,
    ) -> None:
        self._llm = llm
        self._detector = detector
        self._host_lang = host_lang
        self._default_guest_lang = default_guest_lang
        self._model = model

    def resolve_guest_target(
        self,
        request: TranslateRequest,
        cookie_lang: str | None = None,
    ) -> tuple[str, str]:
        """Return ``(locale, tag)`` for a host reply.

        Candidates in priority order: targetLocale, guestLang, cookie,
        configured default. Invalid candidates are skipped.
        """
        candidates = (
            ("target_locale", request.target_locale),
            ("guest_lang", request.guest_lang),
            ("cookie", cookie_lang),
            ("default", self._default_guest_lang),
        )
        for source, candidate in candidates:
            resolved = resolve_locale(candidate)
            if resolved is not None and not is_undetermined(resolved[1]):
                logger.debug("guest_target_resolved", source=source, locale=resolved[0])
                return resolved
            if candidate:
                logger.info("guest_target_candidate_ignored", source=source)
        logger.warning(
            "default_guest_lang_unusable",
            default_guest_lang=self._default_guest_lang,
            fallback=_FALLBACK_GUEST_LANG,
        )
        return _FALLBACK_GUEST_LANG, _FALLBACK_GUEST_LANG

    async def translate(
        self,
        request: TranslateRequest,
        cookie_lang: str | None = None,
    ) -> TranslationResult:
        """Run one translation cycle.

        Raises:
            UpstreamLLMError: If any LLM call fails.
        """
        start = time.monotonic()
        role = explicit_role(request)

        source_lang = request.source_locale
        if role == "host":
            source_lang = source_lang or self._host_lang
        elif source_lang is None:
            source_lang = await self._detector.detect(request.text)

        if role is None:
            role = "host" if same_language(source_lang, self._host_lang) else "guest"

        logger.info(
            "translate_request",
            role=role,
            source_lang=source_lang,
            tone=request.tone,
            text_len=len(request.text),
        )

        if role == "guest":
            target_locale = target_lang = self._host_lang
            guest_lang = source_lang
            if is_undetermined(guest_lang) or same_language(guest_lang, self._host_lang):
                guest_lang = None
            system_prompt, prompt = build_guest_prompt(
                request.text, source_lang, self._host_lang
            )
        else:
            target_locale, target_lang = self.resolve_guest_target(request, cookie_lang)
            guest_lang = None if same_language(target_lang, self._host_lang) else target_lang
            cookie_locale = resolve_locale(cookie_lang)
            system_prompt, prompt = build_host_prompt(
                request.text,
                target_locale=target_locale,
                target_lang=target_lang,
                tone=request.tone,
                source_lang=source_lang,
                guest_lang=request.guest_lang or (cookie_locale[1] if cookie_locale else None),
            )

        response = await self._llm.generate(
            prompt=prompt,
            system_prompt=system_prompt,
            temperature=0.3,
            model=self._model,
        )
        text = response.text
        input_tokens = response.input_tokens
        output_tokens = response.output_tokens
        retried = False

        if same_language(target_lang, self._host_lang) and not looks_like(text, target_lang):
            logger.warning(
                "translation_retry",
                target_lang=target_lang,
                output_len=len(text),
            )
            retry_system, retry_prompt = build_retry_prompt(request.text, text, target_lang)
            retry = await self._llm.generate(
                prompt=retry_prompt,
                system_prompt=retry_system,
                temperature=0.0,
                model=self._model,
            )
            text = retry.text
            input_tokens += retry.input_tokens
            output_tokens += retry.output_tokens
            retried = True

        latency_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "translation_completed",
            role=role,
            target_lang=target_lang,
            retried=retried,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            latency_ms=latency_ms,
        )
        return TranslationResult(
            text=text,
            role=role,
            source_lang=source_lang,
            target_lang=target_lang,
            target_locale=target_locale,
            tone=request.tone,
            retried=retried,
            guest_lang=guest_lang,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            latency_ms=latency_ms,
        )
