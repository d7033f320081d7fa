from __future__ import annotations

import csv
import io
from urllib.parse import unquote

from spendscope.contracts import AnalysisResult
from spendscope.export import (
    EXPORT_COLUMNS,
    analysis_csv_data_uri,
    analysis_to_csv_rows,
    rows_to_csv_text,
)


def test_rows_join_anomalies_onto_trend_points(rich_result) -> None:
    rows = analysis_to_csv_rows(rich_result)
    assert [row["date"] for row in rows] == ["2024-03-13", "2024-03-14", "2024-03-15", "2024-03-20"]
    spike = rows[1]
    assert spike["severity"] == "High"
    assert spike["estimated_impact"] == 840.0
    assert rows[0]["severity"] is None


def test_unmatched_anomaly_dates_are_kept(rich_result) -> None:
    orphan = analysis_to_csv_rows(rich_result)[-1]
    assert orphan["date"] == "2024-03-20"
    assert orphan["cost"] is None
    assert orphan["description"] == "NAT gateway egress"


def test_rows_to_csv_text_writes_header_and_rows() -> None:
    text = rows_to_csv_text([{"date": "d", "cost": 1.5}])
    assert text == "date,cost\nd,1.5\n"
    assert rows_to_csv_text([]) == ""


def test_data_uri_decodes_to_csv(rich_result) -> None:
    uri = analysis_csv_data_uri(rich_result)
    prefix = "data:text/csv;charset=utf-8,"
    assert uri.startswith(prefix)
    reader = csv.DictReader(io.StringIO(unquote(uri[len(prefix):])))
    assert reader.fieldnames == EXPORT_COLUMNS
    assert len(list(reader)) == 4


def test_empty_result_exports_header_only() -> None:
    uri = analysis_csv_data_uri(AnalysisResult())
    assert unquote(uri.split(",", 1)[1]) == ",".join(EXPORT_COLUMNS) + "\n"
