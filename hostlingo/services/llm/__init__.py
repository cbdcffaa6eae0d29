"""LLM provider abstraction and the OpenAI implementation."""

from hostlingo.services.llm.base import LLMProvider, LLMResponse
from hostlingo.services.llm.openai_provider import OpenAIProvider

__all__ = ["LLMProvider", "LLMResponse", "OpenAIProvider"]
