"""Provider abstractions for LLM integrations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol

if TYPE_CHECKING:
    from ..config import GeminiConfig

RETRYABLE_STATUS_CODES = frozenset({408, 409, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class GenerationParameters:
    """Optional provider-tunable knobs; ``None`` means "leave it to the provider"."""

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_output_tokens: Optional[int] = None
    thinking_budget: Optional[int] = None
    thinking_level: Optional[str] = None

    @classmethod
    def from_config(cls, config: "GeminiConfig") -> "GenerationParameters":
        return cls(
            temperature=config.temperature,
            top_p=config.top_p,
            top_k=config.top_k,
            max_output_tokens=config.max_output_tokens,
            thinking_budget=config.thinking_budget,
            thinking_level=config.thinking_level,
        )


class ProviderError(Exception):
    """Standard error raised by provider adapters."""

    kind = "provider_error"

    def __init__(self, message: str, *, retryable: bool = False, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.retryable = retryable
        self.details = details or {}


class NetworkError(ProviderError):
    """Connection failure, timeout or TLS failure while talking to the provider."""

    kind = "network_error"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, retryable=True, details=details)


class DeserializationError(ProviderError):
    """Response body did not match the provider's response schema."""

    kind = "deserialization_error"

    def __init__(self, reason: str, body: str):
        super().__init__(
            f"Failed to deserialize Gemini API response: {reason} - Body: {body}",
            details={"body": body},
        )
        self.body = body


class ApiError(ProviderError):
    """Structured failure reported by the provider, passed through verbatim."""

    kind = "api_error"

    def __init__(self, code: int, message: str, *, status_code: Optional[int] = None):
        super().__init__(
            f"LLM API error {code}: {message}",
            retryable=(status_code or code) in RETRYABLE_STATUS_CODES,
            details={"code": code, "status_code": status_code},
        )
        self.code = code
        self.message = message
        self.status_code = status_code


class UnexpectedStatusError(ProviderError):
    """Non-success HTTP status without a structured error body."""

    kind = "unexpected_status"

    def __init__(self, status_code: int, envelope: Dict[str, Any]):
        super().__init__(
            f"LLM request failed with status {status_code}: {envelope}",
            retryable=status_code in RETRYABLE_STATUS_CODES,
            details={"status_code": status_code, "response": envelope},
        )
        self.status_code = status_code
        self.envelope = envelope


class EmptyResponseError(ProviderError):
    """Successful HTTP status but no usable text in the response."""

    kind = "empty_response"

    def __init__(self, envelope: Dict[str, Any]):
        super().__init__(
            f"LLM response successful but no text content found. Response: {envelope}",
            details={"response": envelope},
        )
        self.envelope = envelope


class BaseProvider(Protocol):
    """Protocol describing provider behaviour."""

    name: str
    model: str

    def send(self, prompt: str) -> str:
        """Return the provider's answer text for the given prompt."""

    def close(self) -> None:  # pragma: no cover - optional hook
        """Optional cleanup hook."""
