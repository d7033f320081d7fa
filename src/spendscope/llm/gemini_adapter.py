"""Gemini adapter using the google-genai SDK."""

from __future__ import annotations

import os
from typing import Any, Optional

try:
    from google import genai
except ImportError:  # pragma: no cover - handled at runtime
    genai = None  # type: ignore[assignment]

from spendscope.config import GEMINI_DEFAULT_MODEL
from spendscope.errors import ConfigurationError, TransportError
from spendscope.llm.base import StructuredBackend


class GeminiAdapter(StructuredBackend):
    """Gemini-backed adapter requesting JSON constrained by ``response_schema``."""

    provider_name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
        base_url: Optional[str] = None,
    ) -> None:
        if api_key is None:
            api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
        self.api_key = api_key
        self.model = model or os.getenv("GEMINI_MODEL", GEMINI_DEFAULT_MODEL)
        self.base_url = base_url
        self._ensure_api_key()
        if client is not None:
            self.client = client
        else:
            if genai is None:
                raise ConfigurationError(
                    "google-genai package is not installed. Install with: pip install google-genai"
                )
            if self.base_url:
                self.client = genai.Client(
                    api_key=self.api_key,
                    http_options={"base_url": self.base_url},
                )
            else:
                self.client = genai.Client(api_key=self.api_key)

    def _ensure_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "Configuration Error: GEMINI_API_KEY is not set. Please configure your environment."
            )

    def generate_structured(self, prompt: str, schema: dict[str, Any]) -> Optional[str]:
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config={
                    "response_mime_type": "application/json",
                    "response_schema": schema,
                },
            )
        except Exception as exc:  # noqa: BLE001 - SDK raises transport-specific types
            raise TransportError(f"Gemini request failed: {exc}") from exc
        text = getattr(response, "text", None)
        return text if isinstance(text, str) else None
