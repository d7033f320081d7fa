from __future__ import annotations

import json
from typing import Any

import pytest

from spendscope.contracts import AnalysisResult

SCENARIO_CSV = "date,service,cost\n2024-01-01,EC2,120.5"

SCENARIO_RESPONSE = (
    '{"summary":{"totalCost":120.5,"potentialSavings":0,"topAnomalyService":"EC2"},'
    '"narrative":"Stable.",'
    '"costTrend":[{"date":"2024-01-01","cost":120.5,"anomaly":null}],'
    '"anomalies":[],'
    '"serviceBreakdown":[{"service":"EC2","cost":120.5,"percentage":100}]}'
)


@pytest.fixture
def scenario_payload() -> dict[str, Any]:
    return json.loads(SCENARIO_RESPONSE)


@pytest.fixture
def rich_payload() -> dict[str, Any]:
    return {
        "summary": {"totalCost": 15234.75, "potentialSavings": 2100, "topAnomalyService": "RDS"},
        "narrative": "Spend rose sharply mid-month.\n\nRDS storage doubled on the 14th.",
        "costTrend": [
            {"date": "2024-03-13", "cost": 480.0, "anomaly": None},
            {"date": "2024-03-14", "cost": 1320.0, "anomaly": 1320.0},
            {"date": "2024-03-15", "cost": 510.25},
        ],
        "anomalies": [
            {
                "date": "2024-03-14",
                "description": "RDS storage spike",
                "severity": "High",
                "estimatedImpact": 840.0,
            },
            {
                "date": "2024-03-20",
                "description": "NAT gateway egress",
                "severity": "Low",
                "estimatedImpact": 35.5,
            },
        ],
        "serviceBreakdown": [
            {"service": "S3", "cost": 900.0, "percentage": 5.9},
            {"service": "RDS", "cost": 6200.0, "percentage": 40.7},
            {"service": "Lambda", "cost": 900.0, "percentage": 5.9},
            {"service": "EC2", "cost": 7234.75, "percentage": 47.5},
        ],
    }


@pytest.fixture
def rich_result(rich_payload: dict[str, Any]) -> AnalysisResult:
    return AnalysisResult.model_validate(rich_payload)
