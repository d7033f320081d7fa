"""Claude adapter using the Anthropic Messages API.

Anthropic has no JSON response mode, so the schema is supplied as the input
schema of a single tool and the model is forced to call it. The tool input
is the structured payload.
"""

from __future__ import annotations

import json
import os
from typing import Any, Optional

try:
    import anthropic
except ImportError:  # pragma: no cover - handled at runtime
    anthropic = None  # type: ignore[assignment]

from spendscope.config import ANTHROPIC_DEFAULT_MODEL
from spendscope.errors import ConfigurationError, TransportError
from spendscope.llm.base import StructuredBackend
from spendscope.llm.schema import to_json_schema

TOOL_NAME = "record_cost_analysis"
MAX_TOKENS = 8192


class ClaudeAdapter(StructuredBackend):
    """Anthropic-backed adapter using a forced tool call for structure."""

    provider_name = "anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.api_key = os.getenv("ANTHROPIC_API_KEY", "") if api_key is None else api_key
        self.model = model or os.getenv("ANTHROPIC_MODEL", ANTHROPIC_DEFAULT_MODEL)
        self.base_url = base_url or os.getenv("ANTHROPIC_BASE_URL")
        self._ensure_api_key()
        if client is not None:
            self.client = client
        else:
            if anthropic is None:
                raise ConfigurationError(
                    "anthropic package is not installed. Install with: pip install anthropic>=0.40.0"
                )
            if self.base_url:
                self.client = anthropic.Anthropic(api_key=self.api_key, base_url=self.base_url)
            else:
                self.client = anthropic.Anthropic(api_key=self.api_key)

    def _ensure_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError("Configuration Error: ANTHROPIC_API_KEY is not set.")

    def generate_structured(self, prompt: str, schema: dict[str, Any]) -> Optional[str]:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                system="Return the analysis by calling the provided tool.",
                messages=[{"role": "user", "content": prompt}],
                tools=[
                    {
                        "name": TOOL_NAME,
                        "description": "Record the structured cloud cost anomaly analysis.",
                        "input_schema": to_json_schema(schema),
                    }
                ],
                tool_choice={"type": "tool", "name": TOOL_NAME},
            )
        except Exception as exc:  # noqa: BLE001
            raise TransportError(f"Anthropic request failed: {exc}") from exc

        for item in getattr(response, "content", None) or []:
            if getattr(item, "type", None) == "tool_use" and getattr(item, "name", None) == TOOL_NAME:
                payload = getattr(item, "input", None)
                if payload:
                    return json.dumps(payload)
        for item in getattr(response, "content", None) or []:
            text = getattr(item, "text", None)
            if isinstance(text, str) and text.strip():
                return text
        return None
