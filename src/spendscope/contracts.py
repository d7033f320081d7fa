"""Data contracts for the cost-anomaly analysis pipeline.

``AnalysisResult`` mirrors the structured payload returned by the generation
backend. The backend is asked to follow ``ANALYSIS_SCHEMA`` but is not a
type-checker, so every field carries a default and explicit nulls fall back
to that default. Anything that cannot be coerced into the shape raises a
``pydantic.ValidationError`` which the analyzer reports as malformed.

``ChartSpec`` is the renderer-agnostic chart description handed to the
charting collaborator.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enums
# =============================================================================


class Severity(str, Enum):
    """Anomaly severity levels requested from the backend.

    Parsed payloads keep ``severity`` as a plain string so an out-of-range
    value still renders (with the neutral style) instead of failing the
    whole analysis.
    """

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def _null_to_zero(value: Any) -> Any:
    return 0.0 if value is None else value


def _null_to_empty(value: Any) -> Any:
    return "" if value is None else value


def _null_to_tuple(value: Any) -> Any:
    return () if value is None else value


# =============================================================================
# Analysis payload
# =============================================================================


_PAYLOAD_CONFIG = ConfigDict(
    extra="ignore",
    frozen=True,
    populate_by_name=True,
    allow_inf_nan=False,
)


class CostSummary(BaseModel):
    model_config = _PAYLOAD_CONFIG

    total_cost: float = Field(default=0.0, alias="totalCost")
    potential_savings: float = Field(default=0.0, alias="potentialSavings")
    top_anomaly_service: str = Field(default="", alias="topAnomalyService")

    @field_validator("total_cost", "potential_savings", mode="before")
    @classmethod
    def _default_numbers(cls, value: Any) -> Any:
        return _null_to_zero(value)

    @field_validator("top_anomaly_service", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> Any:
        return _null_to_empty(value)


class CostTrendPoint(BaseModel):
    model_config = _PAYLOAD_CONFIG

    date: str = ""
    cost: float = 0.0
    anomaly: Optional[float] = None

    @field_validator("cost", mode="before")
    @classmethod
    def _default_cost(cls, value: Any) -> Any:
        return _null_to_zero(value)

    @field_validator("date", mode="before")
    @classmethod
    def _default_date(cls, value: Any) -> Any:
        return _null_to_empty(value)

    @property
    def has_anomaly(self) -> bool:
        return self.anomaly is not None


class Anomaly(BaseModel):
    model_config = _PAYLOAD_CONFIG

    date: str = ""
    description: str = ""
    severity: str = ""
    estimated_impact: float = Field(default=0.0, alias="estimatedImpact")

    @field_validator("date", "description", "severity", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> Any:
        return _null_to_empty(value)

    @field_validator("estimated_impact", mode="before")
    @classmethod
    def _default_impact(cls, value: Any) -> Any:
        return _null_to_zero(value)


class ServiceCost(BaseModel):
    model_config = _PAYLOAD_CONFIG

    service: str = ""
    cost: float = 0.0
    percentage: float = 0.0

    @field_validator("service", mode="before")
    @classmethod
    def _default_service(cls, value: Any) -> Any:
        return _null_to_empty(value)

    @field_validator("cost", "percentage", mode="before")
    @classmethod
    def _default_numbers(cls, value: Any) -> Any:
        return _null_to_zero(value)


class AnalysisResult(BaseModel):
    """Structured cost-anomaly analysis for one uploaded CSV."""

    model_config = _PAYLOAD_CONFIG

    summary: CostSummary = Field(default_factory=CostSummary)
    narrative: str = ""
    cost_trend: tuple[CostTrendPoint, ...] = Field(default=(), alias="costTrend")
    anomalies: tuple[Anomaly, ...] = ()
    service_breakdown: tuple[ServiceCost, ...] = Field(default=(), alias="serviceBreakdown")

    @field_validator("summary", mode="before")
    @classmethod
    def _default_summary(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("narrative", mode="before")
    @classmethod
    def _default_narrative(cls, value: Any) -> Any:
        return _null_to_empty(value)

    @field_validator("cost_trend", "anomalies", "service_breakdown", mode="before")
    @classmethod
    def _default_sequences(cls, value: Any) -> Any:
        return _null_to_tuple(value)

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase JSON payload shape."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Chart contracts
# =============================================================================


class ChartDataset(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    label: str
    data: list[Optional[float]] = Field(default_factory=list)
    type: Optional[str] = None
    border_color: Optional[str] = Field(default=None, alias="borderColor")
    background_color: Optional[Union[str, list[str]]] = Field(default=None, alias="backgroundColor")
    border_width: Optional[int] = Field(default=None, alias="borderWidth")
    tension: Optional[float] = None
    fill: Optional[bool] = None
    point_radius: Optional[int] = Field(default=None, alias="pointRadius")
    point_hover_radius: Optional[int] = Field(default=None, alias="pointHoverRadius")


class ChartSpec(BaseModel):
    """Chart-ready projection: ``{type, labels, datasets, options}``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["line", "bar"]
    labels: list[str] = Field(default_factory=list)
    datasets: list[ChartDataset] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)

    def to_chartjs_config(self) -> dict[str, Any]:
        """Return the config object expected by ``new Chart(ctx, config)``."""
        datasets: list[dict[str, Any]] = []
        for dataset in self.datasets:
            payload = dataset.model_dump(by_alias=True, exclude_none=True)
            # Null entries are the "no value" markers and must survive the dump.
            payload["data"] = list(dataset.data)
            datasets.append(payload)
        return {
            "type": self.type,
            "data": {"labels": list(self.labels), "datasets": datasets},
            "options": self.options,
        }
