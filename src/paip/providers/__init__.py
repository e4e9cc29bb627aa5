"""Provider registry exports."""

from .base import (
    ApiError,
    BaseProvider,
    DeserializationError,
    EmptyResponseError,
    GenerationParameters,
    NetworkError,
    ProviderError,
    UnexpectedStatusError,
)
from .gemini import GeminiProvider

__all__ = [
    "ApiError",
    "BaseProvider",
    "DeserializationError",
    "EmptyResponseError",
    "GenerationParameters",
    "GeminiProvider",
    "NetworkError",
    "ProviderError",
    "UnexpectedStatusError",
]
