"""Response shape requested from structured-generation backends.

``ANALYSIS_SCHEMA`` is a request parameter, not a validator: it is passed to
the backend to constrain its output. It uses the OpenAPI subset accepted by
Gemini's ``response_schema``; ``to_json_schema`` rewrites it as strict JSON
Schema for backends that take that dialect instead.
"""

from __future__ import annotations

import copy
from typing import Any

from spendscope.contracts import Severity

SEVERITY_VALUES = [level.value for level in Severity]

_NUMBER = {"type": "number"}
_STRING = {"type": "string"}

ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {
            "type": "object",
            "properties": {
                "totalCost": _NUMBER,
                "potentialSavings": _NUMBER,
                "topAnomalyService": _STRING,
            },
            "required": ["totalCost", "potentialSavings", "topAnomalyService"],
        },
        "narrative": _STRING,
        "costTrend": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "date": _STRING,
                    "cost": _NUMBER,
                    "anomaly": {"type": "number", "nullable": True},
                },
                "required": ["date", "cost", "anomaly"],
            },
        },
        "anomalies": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "date": _STRING,
                    "description": _STRING,
                    "severity": {"type": "string", "enum": SEVERITY_VALUES},
                    "estimatedImpact": _NUMBER,
                },
                "required": ["date", "description", "severity", "estimatedImpact"],
            },
        },
        "serviceBreakdown": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "service": _STRING,
                    "cost": _NUMBER,
                    "percentage": _NUMBER,
                },
                "required": ["service", "cost", "percentage"],
            },
        },
    },
    "required": ["summary", "narrative", "costTrend", "anomalies", "serviceBreakdown"],
}


def to_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Convert the OpenAPI-subset schema into strict JSON Schema.

    ``nullable`` becomes a ``[type, "null"]`` union and every object lists
    all of its properties as required with ``additionalProperties: false``,
    which is what strict structured-output modes expect.
    """
    converted = copy.deepcopy(schema)
    nullable = bool(converted.pop("nullable", False))
    if nullable and isinstance(converted.get("type"), str):
        converted["type"] = [converted["type"], "null"]

    if converted.get("type") == "object":
        properties = {
            name: to_json_schema(child)
            for name, child in dict(converted.get("properties") or {}).items()
        }
        converted["properties"] = properties
        converted["required"] = list(properties.keys())
        converted["additionalProperties"] = False
    elif converted.get("type") == "array" and isinstance(converted.get("items"), dict):
        converted["items"] = to_json_schema(converted["items"])
    return converted
