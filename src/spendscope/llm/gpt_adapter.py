"""GPT adapter using the OpenAI Responses API."""

from __future__ import annotations

import os
from typing import Any, Optional

try:
    from openai import OpenAI
except ImportError:  # pragma: no cover - handled at runtime
    OpenAI = None  # type: ignore[assignment]

from spendscope.config import OPENAI_DEFAULT_MODEL
from spendscope.errors import ConfigurationError, TransportError
from spendscope.llm.base import StructuredBackend
from spendscope.llm.schema import to_json_schema

SCHEMA_NAME = "cost_anomaly_analysis"


class GPTAdapter(StructuredBackend):
    """OpenAI-backed adapter using strict ``json_schema`` text format."""

    provider_name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.api_key = os.getenv("OPENAI_API_KEY", "") if api_key is None else api_key
        self.model = model or os.getenv("OPENAI_MODEL", OPENAI_DEFAULT_MODEL)
        self.base_url = base_url or os.getenv("OPENAI_BASE_URL")
        self._ensure_api_key()
        if client is not None:
            self.client = client
        else:
            if OpenAI is None:
                raise ConfigurationError(
                    "openai package is not installed. Install with: pip install openai>=1.0.0"
                )
            if self.base_url:
                self.client = OpenAI(api_key=self.api_key, base_url=self.base_url)
            else:
                self.client = OpenAI(api_key=self.api_key)

    def _ensure_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError("Configuration Error: OPENAI_API_KEY is not set.")

    def generate_structured(self, prompt: str, schema: dict[str, Any]) -> Optional[str]:
        try:
            response = self.client.responses.create(
                model=self.model,
                input=[
                    {"role": "system", "content": [{"type": "input_text", "text": "Return JSON only."}]},
                    {"role": "user", "content": [{"type": "input_text", "text": prompt}]},
                ],
                text={
                    "format": {
                        "type": "json_schema",
                        "name": SCHEMA_NAME,
                        "schema": to_json_schema(schema),
                        "strict": True,
                    }
                },
            )
        except Exception as exc:  # noqa: BLE001
            raise TransportError(f"OpenAI request failed: {exc}") from exc
        output_text = getattr(response, "output_text", None)
        return output_text if isinstance(output_text, str) else None
