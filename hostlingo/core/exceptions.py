"""Custom exception classes for structured error handling."""

from typing import Any


class TranslatorError(Exception):
    """Base exception for all translator errors."""

    def __init__(self, code: str, message: str, status_code: int = 500) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "error": self.message, "code": self.code}


class InvalidJSONError(TranslatorError):
    def __init__(self, message: str = "Request body must be a JSON object") -> None:
        super().__init__(code="INVALID_JSON", message=message, status_code=400)


class InvalidRequestError(TranslatorError):
    def __init__(self, message: str = "Invalid request") -> None:
        super().__init__(code="INVALID_REQUEST", message=message, status_code=400)


class InvalidModeError(TranslatorError):
    def __init__(self, message: str = "invalid mode") -> None:
        super().__init__(code="INVALID_MODE", message=message, status_code=400)


class MissingAPIKeyError(TranslatorError):
    def __init__(self, message: str = "Missing OPENAI_API_KEY") -> None:
        super().__init__(code="MISSING_API_KEY", message=message, status_code=500)


class UpstreamLLMError(TranslatorError):
    """The LLM API call failed. Carries the upstream HTTP status when there is one."""

    def __init__(self, message: str = "LLM request failed", status_code: int | None = None) -> None:
        super().__init__(
            code="UPSTREAM_ERROR",
            message=message,
            status_code=status_code or 500,
        )
