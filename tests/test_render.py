from __future__ import annotations

import pytest

from spendscope.config import NEUTRAL_SEVERITY_STYLE, SEVERITY_STYLES
from spendscope.contracts import AnalysisResult
from spendscope.render import (
    format_currency,
    narrative_paragraphs,
    render_analysis_html,
    render_configuration_error_html,
    render_error_html,
    render_tier_buttons,
    render_upload_view,
    severity_style,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (120.5, "$120.5"),
        (0, "$0"),
        (None, "$0"),
        (1234567, "$1,234,567"),
        (15234.75, "$15,234.75"),
        (0.1234, "$0.123"),
    ],
)
def test_format_currency(value, expected: str) -> None:
    assert format_currency(value) == expected


def test_severity_style_falls_back_to_neutral() -> None:
    assert severity_style("High") == SEVERITY_STYLES["High"]
    assert severity_style("Critical") == NEUTRAL_SEVERITY_STYLE
    assert severity_style("") == NEUTRAL_SEVERITY_STYLE


def test_narrative_paragraphs_split_on_line_breaks() -> None:
    assert narrative_paragraphs("First.\n\nSecond.\nThird.") == ["First.", "Second.", "Third."]
    assert narrative_paragraphs("") == []


def test_scenario_renders_total_cost_and_no_anomaly_cards(scenario_payload) -> None:
    markup = render_analysis_html(AnalysisResult.model_validate(scenario_payload))
    assert "Total Cost" in markup
    assert "$120.5" in markup
    assert "anomaly-card" not in markup
    assert "<p>Stable.</p>" in markup


def test_anomaly_cards_follow_input_order(rich_result) -> None:
    markup = render_analysis_html(rich_result)
    assert markup.count('class="anomaly-card') == 2
    assert markup.index("RDS storage spike") < markup.index("NAT gateway egress")
    assert SEVERITY_STYLES["High"] in markup
    assert "Impact: $840" in markup
    assert "Impact: $35.5" in markup


def test_render_emits_chart_mount_points_and_actions(rich_result) -> None:
    markup = render_analysis_html(rich_result)
    assert '<canvas id="costChart">' in markup
    assert '<canvas id="serviceChart">' in markup
    assert 'download="analyzed_cost_report.csv"' in markup
    assert 'href="data:text/csv;charset=utf-8,' in markup
    assert 'hx-get="/dashboard.html"' in markup
    assert "Analyze Another Report" in markup


def test_render_unknown_severity_uses_neutral_style() -> None:
    result = AnalysisResult.model_validate(
        {"anomalies": [{"date": "d", "description": "x", "severity": "Critical", "estimatedImpact": 5}]}
    )
    markup = render_analysis_html(result)
    assert f"border {NEUTRAL_SEVERITY_STYLE}" in markup
    assert "Critical" in markup


def test_render_tolerates_empty_result() -> None:
    markup = render_analysis_html(AnalysisResult())
    assert "Total Cost" in markup
    assert "$0" in markup


def test_render_escapes_payload_text() -> None:
    result = AnalysisResult.model_validate(
        {
            "narrative": "<script>alert(1)</script>",
            "anomalies": [{"date": "d", "description": "<b>x</b>", "severity": "Low"}],
        }
    )
    markup = render_analysis_html(result)
    assert "<script>alert(1)</script>" not in markup
    assert "&lt;script&gt;" in markup
    assert "&lt;b&gt;x&lt;/b&gt;" in markup


def test_render_is_deterministic(rich_result) -> None:
    before = rich_result.model_dump()
    assert render_analysis_html(rich_result) == render_analysis_html(rich_result)
    assert rich_result.model_dump() == before


def test_error_fragment_carries_message_and_restart() -> None:
    markup = render_error_html("Received an empty response from the AI. Please try again.")
    assert "Analysis Failed" in markup
    assert "Received an empty response" in markup
    assert "Try Again" in markup
    assert 'hx-get="/dashboard.html"' in markup


def test_configuration_error_fragment() -> None:
    markup = render_configuration_error_html("GEMINI_API_KEY is not set")
    assert "Initialization Error" in markup
    assert "GEMINI_API_KEY is not set" in markup


def test_tier_buttons_mark_selected_tier() -> None:
    markup = render_tier_buttons("Enterprise")
    assert 'id="tier-btn-Enterprise" hx-post="/tier/Enterprise"' in markup
    enterprise = markup.split('id="tier-btn-Enterprise"')[1].split("</button>")[0]
    developer = markup.split('id="tier-btn-Developer"')[1].split("</button>")[0]
    assert "bg-cyan-500" in enterprise
    assert "bg-cyan-500" not in developer


def test_upload_view_contains_form_and_optional_notice() -> None:
    plain = render_upload_view("Business")
    assert 'id="upload-form"' in plain
    assert 'name="file"' in plain
    assert 'role="alert"' not in plain
    noticed = render_upload_view("Business", notice="Please select a file.")
    assert "Please select a file." in noticed


def test_upload_form_is_restored_when_request_fails() -> None:
    markup = render_upload_view("Business")
    assert 'id="request-error" class="hidden' in markup
    assert "hx-on::response-error=" in markup
    assert "hx-on::send-error=" in markup
    assert "getElementById('request-error').classList.remove('hidden')" in markup
