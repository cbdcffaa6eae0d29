"""OpenAI LLM provider implementation.

Uses the chat-completions API through the official async SDK. Works against
any OpenAI-compatible endpoint when a base URL is configured.
All external calls have a timeout and structured error logging.
"""

import asyncio

import openai
import structlog
from openai import AsyncOpenAI

from hostlingo.core.exceptions import UpstreamLLMError
from hostlingo.services.llm.base import LLMProvider, LLMResponse

logger = structlog.get_logger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions implementation of LLMProvider."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout_seconds: float = 20.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(api_key=api_key, base_url=base_url)
        self._model = model
        self._timeout_seconds = timeout_seconds
        logger.info("openai_provider_initialized", model=model, base_url=base_url)

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
        model: str | None = None,
    ) -> LLMResponse:
        """Generate a complete response using the chat-completions API."""
        model_name = model or self._model
        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=model_name,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": prompt},
                    ],
                    max_tokens=max_tokens,
                    temperature=temperature,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "openai_generate_timeout",
                model=model_name,
                prompt_len=len(prompt),
                timeout_seconds=self._timeout_seconds,
            )
            raise UpstreamLLMError(
                f"LLM request timed out after {self._timeout_seconds}s"
            ) from e
        except openai.APIStatusError as e:
            logger.error(
                "openai_generate_failed",
                status_code=e.status_code,
                error=e.message,
                model=model_name,
                prompt_len=len(prompt),
            )
            raise UpstreamLLMError(e.message, status_code=e.status_code) from e
        except openai.OpenAIError as e:
            logger.error(
                "openai_generate_failed",
                error=str(e),
                model=model_name,
                prompt_len=len(prompt),
            )
            raise UpstreamLLMError(f"LLM request failed: {e}") from e

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        usage = response.usage
        result = LLMResponse(
            text=text.strip(),
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
        logger.debug(
            "openai_generate_ok",
            model=model_name,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            prompt_len=len(prompt),
        )
        return result
