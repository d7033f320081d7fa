"""Provider selection for structured-generation backends."""

from __future__ import annotations

from typing import Callable, Optional

from spendscope.config import AppSettings, load_settings
from spendscope.errors import ConfigurationError
from spendscope.llm.base import StructuredBackend
from spendscope.llm.claude_adapter import ClaudeAdapter
from spendscope.llm.gemini_adapter import GeminiAdapter
from spendscope.llm.gpt_adapter import GPTAdapter

BackendFactory = Callable[..., StructuredBackend]

BACKEND_FACTORIES: dict[str, BackendFactory] = {
    GeminiAdapter.provider_name: GeminiAdapter,
    GPTAdapter.provider_name: GPTAdapter,
    ClaudeAdapter.provider_name: ClaudeAdapter,
}


def build_backend(settings: Optional[AppSettings] = None) -> StructuredBackend:
    """Construct the configured backend.

    Raises ``ConfigurationError`` for an unknown provider or a missing
    credential. No network call happens here.
    """
    settings = settings or load_settings()
    factory = BACKEND_FACTORIES.get(settings.provider)
    if factory is None:
        supported = ", ".join(sorted(BACKEND_FACTORIES))
        raise ConfigurationError(
            f"Unsupported provider '{settings.provider}'. Expected one of: {supported}"
        )
    return factory(
        api_key=settings.api_key,
        model=settings.model or None,
        base_url=settings.base_url,
    )
