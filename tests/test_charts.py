from __future__ import annotations

import json

from spendscope.charts import project_charts, project_cost_trend, project_service_breakdown
from spendscope.contracts import AnalysisResult
from spendscope.render import render_chart_payloads


def test_scenario_trend_has_single_point_with_no_value_marker(scenario_payload) -> None:
    spec = project_cost_trend(AnalysisResult.model_validate(scenario_payload))
    assert spec.type == "line"
    assert spec.labels == ["2024-01-01"]
    cost, anomalies = spec.datasets
    assert cost.data == [120.5]
    assert anomalies.type == "scatter"
    assert anomalies.data == [None]


def test_trend_marks_only_anomalous_points(rich_result) -> None:
    spec = project_cost_trend(rich_result)
    assert spec.labels == ["2024-03-13", "2024-03-14", "2024-03-15"]
    assert spec.datasets[0].data == [480.0, 1320.0, 510.25]
    assert spec.datasets[1].data == [None, 1320.0, None]
    assert 0 not in spec.datasets[1].data


def test_trend_keeps_explicit_zero_anomaly_value() -> None:
    result = AnalysisResult.model_validate(
        {"costTrend": [{"date": "a", "cost": 1, "anomaly": 0}, {"date": "b", "cost": 2}]}
    )
    assert project_cost_trend(result).datasets[1].data == [0.0, None]


def test_breakdown_sorts_descending_with_stable_ties(rich_result) -> None:
    spec = project_service_breakdown(rich_result)
    assert spec.type == "bar"
    assert spec.labels == ["EC2", "RDS", "S3", "Lambda"]
    assert spec.datasets[0].data == [7234.75, 6200.0, 900.0, 900.0]
    assert spec.options["indexAxis"] == "y"
    assert sorted(spec.labels) == sorted(item.service for item in rich_result.service_breakdown)


def test_breakdown_does_not_reorder_input(rich_result) -> None:
    before = [item.service for item in rich_result.service_breakdown]
    project_service_breakdown(rich_result)
    assert [item.service for item in rich_result.service_breakdown] == before


def test_projections_are_deterministic(rich_result) -> None:
    assert project_cost_trend(rich_result) == project_cost_trend(rich_result)
    assert project_service_breakdown(rich_result).to_chartjs_config() == (
        project_service_breakdown(rich_result).to_chartjs_config()
    )


def test_empty_result_projects_empty_charts() -> None:
    charts = project_charts(AnalysisResult())
    assert set(charts) == {"costChart", "serviceChart"}
    assert charts["costChart"].labels == []
    assert charts["serviceChart"].datasets[0].data == []


def test_chart_payloads_embed_chartjs_config(rich_result) -> None:
    markup = render_chart_payloads(project_charts(rich_result))
    assert markup.count('type="application/json"') == 2
    start = markup.index('data-chart-mount="costChart">') + len('data-chart-mount="costChart">')
    config = json.loads(markup[start : markup.index("</script>", start)])
    assert config["type"] == "line"
    assert config["data"]["datasets"][1]["data"] == [None, 1320.0, None]


def test_chart_payloads_escape_script_terminators() -> None:
    result = AnalysisResult.model_validate(
        {"serviceBreakdown": [{"service": "</script><b>", "cost": 1, "percentage": 100}]}
    )
    markup = render_chart_payloads(project_charts(result))
    assert "</script><b>" not in markup
    assert "<\\/script><b>" in markup
