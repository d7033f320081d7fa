"""Cost-anomaly analysis requests against a structured-generation backend."""

from __future__ import annotations

import json
import logging
import re
from typing import Optional

from pydantic import ValidationError

from spendscope.config import AppSettings
from spendscope.contracts import AnalysisResult
from spendscope.errors import (
    AnalysisError,
    EmptyResponseError,
    MalformedResponseError,
    TransportError,
)
from spendscope.llm.base import StructuredBackend
from spendscope.llm.prompting import build_cost_analysis_prompt
from spendscope.llm.router import build_backend
from spendscope.llm.schema import ANALYSIS_SCHEMA

LOGGER = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove a leading ```json (or bare ```) marker and a trailing ``` marker."""
    return _FENCE_PATTERN.sub("", text)


def parse_analysis_payload(text: str) -> AnalysisResult:
    """Parse backend text into an ``AnalysisResult`` or raise ``MalformedResponseError``."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(
            f"The AI response was not valid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})."
        ) from exc
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"The AI response was a JSON {type(payload).__name__}, expected an object."
        )
    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(token) for token in first.get("loc", ())) or "<root>"
        raise MalformedResponseError(
            f"The AI response did not match the analysis shape at {location}: {first.get('msg')}"
        ) from exc


def analyze_cost_csv(
    csv_text: str,
    backend: Optional[StructuredBackend] = None,
    settings: Optional[AppSettings] = None,
) -> AnalysisResult:
    """Run one structured-generation round-trip for ``csv_text``.

    A missing credential raises ``ConfigurationError`` while the backend is
    built, before any request is issued. There is no retry: each call issues
    at most one request.
    """
    if backend is None:
        backend = build_backend(settings)

    prompt = build_cost_analysis_prompt(csv_text)
    LOGGER.info(
        "Requesting cost analysis provider=%s csv_chars=%d",
        backend.provider_name,
        len(csv_text),
    )
    try:
        raw_text = backend.generate_structured(prompt, ANALYSIS_SCHEMA)
    except AnalysisError:
        raise
    except Exception as exc:  # noqa: BLE001 - any backend failure is a transport failure
        raise TransportError(f"Analysis request failed: {exc}") from exc

    if raw_text is None or not raw_text.strip():
        raise EmptyResponseError("Received an empty response from the AI. Please try again.")

    result = parse_analysis_payload(strip_code_fences(raw_text))
    LOGGER.info(
        "Cost analysis parsed trend_points=%d anomalies=%d services=%d",
        len(result.cost_trend),
        len(result.anomalies),
        len(result.service_breakdown),
    )
    return result
