"""paip - pipe text through an LLM and get plain text back."""

__version__ = "0.1.0"

from .client import LlmClient, LlmProvider  # noqa: E402,F401
from .config import Config, ConfigError  # noqa: E402,F401

__all__ = ["Config", "ConfigError", "LlmClient", "LlmProvider", "__version__"]
