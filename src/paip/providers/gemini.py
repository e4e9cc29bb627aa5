"""Google Gemini provider adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from pydantic import ValidationError

from ._gemini_wire import (
    Content,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    Part,
    ThinkingConfig,
)
from .base import (
    ApiError,
    BaseProvider,
    DeserializationError,
    EmptyResponseError,
    GenerationParameters,
    UnexpectedStatusError,
)

if TYPE_CHECKING:
    from ..transport import HttpTransport

LOGGER = logging.getLogger("paip.providers.gemini")

API_BASE = "https://generativelanguage.googleapis.com/v1beta"

RequestHook = Callable[[str, Dict[str, Any]], None]


def endpoint_for(model: str) -> str:
    return f"{API_BASE}/models/{model}:generateContent"


def _thinking_config(params: GenerationParameters) -> Optional[ThinkingConfig]:
    # A named level supersedes the numeric budget; the two are never sent together.
    if params.thinking_level is not None:
        return ThinkingConfig(thinking_level=params.thinking_level)
    if params.thinking_budget is not None:
        return ThinkingConfig(thinking_budget=params.thinking_budget)
    return None


def build_request(params: GenerationParameters, prompt: str) -> GenerateContentRequest:
    """Map generation parameters and the assembled prompt to a wire request.

    Unset knobs are left out entirely, and when nothing is set the request
    carries no ``generationConfig`` at all.
    """
    generation_config = GenerationConfig(
        temperature=params.temperature,
        top_p=params.top_p,
        top_k=params.top_k,
        max_output_tokens=params.max_output_tokens,
        thinking_config=_thinking_config(params),
    )
    if not generation_config.model_dump(exclude_none=True):
        generation_config = None

    return GenerateContentRequest(
        contents=[Content(role="user", parts=[Part(text=prompt)])],
        generation_config=generation_config,
    )


def serialize_request(request: GenerateContentRequest) -> Dict[str, Any]:
    return request.model_dump(by_alias=True, exclude_none=True)


def _envelope(response: GenerateContentResponse) -> Dict[str, Any]:
    return response.model_dump(by_alias=True, exclude_none=True)


def interpret_response(status_code: int, raw_body: str) -> str:
    """Turn a raw provider reply into answer text or a typed failure.

    Only the first candidate and its first part are consulted; any further
    candidates or parts are ignored.
    """
    try:
        response = GenerateContentResponse.model_validate_json(raw_body)
    except ValidationError as exc:
        raise DeserializationError(str(exc), raw_body) from exc

    if not 200 <= status_code < 300:
        if response.error is not None:
            raise ApiError(response.error.code, response.error.message, status_code=status_code)
        raise UnexpectedStatusError(status_code, _envelope(response))

    candidates = response.candidates or []
    if not candidates:
        raise EmptyResponseError(_envelope(response))
    content = candidates[0].content
    if content is None or not content.parts:
        raise EmptyResponseError(_envelope(response))
    return content.parts[0].text


class GeminiProvider(BaseProvider):
    """Adapter for the Gemini ``generateContent`` REST endpoint."""

    name = "gemini"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        transport: HttpTransport,
        parameters: Optional[GenerationParameters] = None,
        on_request: Optional[RequestHook] = None,
    ):
        self.model = model
        self._api_key = api_key
        self._transport = transport
        self._parameters = parameters or GenerationParameters()
        self._on_request = on_request

    @property
    def url(self) -> str:
        return endpoint_for(self.model)

    def send(self, prompt: str) -> str:
        body = serialize_request(build_request(self._parameters, prompt))
        if self._on_request is not None:
            self._on_request(f"{self.url}?key=***", body)

        LOGGER.debug("Sending generateContent request for model=%s (%s chars)", self.model, len(prompt))
        reply = self._transport.post(self.url, body, params={"key": self._api_key})
        return interpret_response(reply.status_code, reply.body)

    def close(self) -> None:
        self._transport.close()
