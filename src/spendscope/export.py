"""CSV export of an analysis for the dashboard's download action."""

from __future__ import annotations

import csv
import io
from typing import Any
from urllib.parse import quote

from spendscope.contracts import AnalysisResult

EXPORT_COLUMNS = [
    "date",
    "cost",
    "anomaly",
    "severity",
    "estimated_impact",
    "description",
]


def analysis_to_csv_rows(result: AnalysisResult) -> list[dict[str, Any]]:
    """One row per trend point, annotated with the anomaly reported for that date.

    Anomalies whose date has no trend point are appended as their own rows so
    nothing reported by the backend is dropped from the export.
    """
    anomalies_by_date: dict[str, list[Any]] = {}
    for anomaly in result.anomalies:
        anomalies_by_date.setdefault(anomaly.date, []).append(anomaly)

    rows: list[dict[str, Any]] = []
    matched_dates: set[str] = set()
    for point in result.cost_trend:
        matches = anomalies_by_date.get(point.date) or [None]
        if matches[0] is not None:
            matched_dates.add(point.date)
        for anomaly in matches:
            rows.append(
                {
                    "date": point.date,
                    "cost": point.cost,
                    "anomaly": point.anomaly,
                    "severity": anomaly.severity if anomaly else None,
                    "estimated_impact": anomaly.estimated_impact if anomaly else None,
                    "description": anomaly.description if anomaly else None,
                }
            )

    for anomaly in result.anomalies:
        if anomaly.date in matched_dates:
            continue
        rows.append(
            {
                "date": anomaly.date,
                "cost": None,
                "anomaly": None,
                "severity": anomaly.severity,
                "estimated_impact": anomaly.estimated_impact,
                "description": anomaly.description,
            }
        )
    return rows


def rows_to_csv_text(rows: list[dict[str, Any]], fieldnames: list[str] | None = None) -> str:
    ordered_keys = fieldnames or (list(rows[0].keys()) if rows else [])
    if not ordered_keys:
        return ""
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=ordered_keys, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: row.get(key) for key in ordered_keys})
    return output.getvalue()


def csv_data_uri(text: str) -> str:
    return "data:text/csv;charset=utf-8," + quote(text, safe="")


def analysis_csv_data_uri(result: AnalysisResult) -> str:
    return csv_data_uri(rows_to_csv_text(analysis_to_csv_rows(result), EXPORT_COLUMNS))
