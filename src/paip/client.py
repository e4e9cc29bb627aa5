"""Client facade turning a validated configuration into LLM answers."""

from __future__ import annotations

import json
import logging
from enum import Enum
from functools import partial
from time import perf_counter
from typing import Any, Callable, Dict, Optional

import typer

from .config import Config, ConfigError
from .metrics import LoggingMetricsCollector, MetricsCollector, MetricsEvent
from .providers.base import BaseProvider, GenerationParameters, ProviderError
from .providers.gemini import GeminiProvider
from .transport import HttpTransport

LOGGER = logging.getLogger("paip.client")

PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY"

EmitFn = Callable[[str], None]


class LlmProvider(str, Enum):
    GEMINI = "gemini"


def _create_gemini(
    config: Config,
    transport: HttpTransport,
    on_request: Optional[Callable[[str, Dict[str, Any]], None]],
) -> BaseProvider:
    gemini = config.gemini
    if gemini is None:
        raise ConfigError("Gemini configuration not found")
    if not gemini.key.strip() or gemini.key == PLACEHOLDER_API_KEY:
        raise ConfigError(f"API key is not configured for provider: {LlmProvider.GEMINI.value}")
    return GeminiProvider(
        api_key=gemini.key,
        model=gemini.model,
        transport=transport,
        parameters=GenerationParameters.from_config(gemini),
        on_request=on_request,
    )


PROVIDER_FACTORIES = {
    LlmProvider.GEMINI: _create_gemini,
}


def resolve_provider(name: str) -> LlmProvider:
    try:
        return LlmProvider(name.strip().lower())
    except ValueError:
        raise ConfigError(f"Unsupported LLM provider: {name}") from None


class LlmClient:
    """Send assembled prompts to the configured provider and return plain text.

    All configuration problems surface from the constructor; ``send`` only
    ever raises :class:`~paip.providers.base.ProviderError` subclasses.
    Calls on one instance are sequential.
    """

    def __init__(
        self,
        config: Config,
        verbose: bool = False,
        *,
        transport: Optional[HttpTransport] = None,
        emit: Optional[EmitFn] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.provider = resolve_provider(config.provider)
        self._verbose = verbose
        self._emit = emit or partial(typer.echo, err=True)
        self._metrics = metrics or LoggingMetricsCollector()

        owns_transport = transport is None
        transport = transport or HttpTransport(timeout=config.timeout)
        try:
            self._provider = PROVIDER_FACTORIES[self.provider](
                config,
                transport,
                self._emit_request if verbose else None,
            )
        except ConfigError:
            if owns_transport:
                transport.close()
            raise
        LOGGER.debug(
            "LLM client ready provider=%s model=%s timeout=%ss",
            self.provider.value,
            self._provider.model,
            config.timeout,
        )

    def _emit_request(self, url: str, body: Dict[str, Any]) -> None:
        self._emit("--- LLM Request ---")
        self._emit(f"POST {url}")
        self._emit(json.dumps(body, indent=2, ensure_ascii=False))
        self._emit("-------------------")

    def send(self, prompt: str) -> str:
        start = perf_counter()
        try:
            text = self._provider.send(prompt)
        except ProviderError as exc:
            LOGGER.debug("LLM request failed: %s", exc.kind)
            self._record("error", start, exc.kind)
            raise
        self._record("success", start)
        return text.rstrip()

    def _record(self, status: str, start: float, error_kind: Optional[str] = None) -> None:
        event = MetricsEvent(
            provider=self.provider.value,
            model=self._provider.model,
            status=status,
            duration_ms=(perf_counter() - start) * 1000,
            error_kind=error_kind,
        )
        try:
            self._metrics.record(event)
        except OSError:
            LOGGER.warning("Failed to record request metrics", exc_info=True)

    def close(self) -> None:
        self._provider.close()

    def __enter__(self) -> "LlmClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
