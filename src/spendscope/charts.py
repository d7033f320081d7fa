"""Chart projections of an ``AnalysisResult``.

Both projections are pure: they read the result and return a new
``ChartSpec`` without touching the input.
"""

from __future__ import annotations

from typing import Any

from spendscope.config import (
    ANOMALY_MARKER_COLOR,
    AXIS_TICK_COLOR,
    COST_CHART_ID,
    LEGEND_LABEL_COLOR,
    SERVICE_BAR_COLORS,
    SERVICE_CHART_ID,
    TREND_LINE_COLOR,
)
from spendscope.contracts import AnalysisResult, ChartDataset, ChartSpec


def _axis_options() -> dict[str, Any]:
    return {
        "y": {"ticks": {"color": AXIS_TICK_COLOR}},
        "x": {"ticks": {"color": AXIS_TICK_COLOR}},
    }


def project_cost_trend(result: AnalysisResult) -> ChartSpec:
    """Cost line plus a sparse anomaly scatter over the trend dates.

    Points without an anomaly map to ``None`` so the scatter only draws a
    marker where the backend flagged one.
    """
    points = list(result.cost_trend)
    return ChartSpec(
        type="line",
        labels=[point.date for point in points],
        datasets=[
            ChartDataset(
                label="Cost",
                data=[point.cost for point in points],
                border_color=TREND_LINE_COLOR,
                tension=0.1,
                fill=False,
            ),
            ChartDataset(
                label="Anomalies",
                type="scatter",
                data=[point.anomaly if point.has_anomaly else None for point in points],
                background_color=ANOMALY_MARKER_COLOR,
                point_radius=6,
                point_hover_radius=8,
            ),
        ],
        options={
            "responsive": True,
            "maintainAspectRatio": False,
            "scales": _axis_options(),
            "plugins": {"legend": {"labels": {"color": LEGEND_LABEL_COLOR}}},
        },
    )


def project_service_breakdown(result: AnalysisResult) -> ChartSpec:
    """Horizontal bars of spend per service, highest cost first.

    ``sorted`` is stable, so services with equal cost keep their input order.
    """
    ranked = sorted(result.service_breakdown, key=lambda item: item.cost, reverse=True)
    return ChartSpec(
        type="bar",
        labels=[item.service for item in ranked],
        datasets=[
            ChartDataset(
                label="Cost",
                data=[item.cost for item in ranked],
                background_color=list(SERVICE_BAR_COLORS),
                border_width=0,
            )
        ],
        options={
            "indexAxis": "y",
            "responsive": True,
            "maintainAspectRatio": False,
            "scales": _axis_options(),
            "plugins": {"legend": {"display": False}},
        },
    )


def project_charts(result: AnalysisResult) -> dict[str, ChartSpec]:
    """Return chart specs keyed by the canvas mount id they draw into."""
    return {
        COST_CHART_ID: project_cost_trend(result),
        SERVICE_CHART_ID: project_service_breakdown(result),
    }
