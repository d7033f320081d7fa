"""HTML fragments for the analysis dashboard.

Every function here is pure: it returns markup for the fragment-swap
collaborator to insert and never touches a document itself. All text coming
from the analysis payload is HTML-escaped.
"""

from __future__ import annotations

import html
import json
from typing import Mapping, Optional

from spendscope.config import (
    COST_CHART_ID,
    EXPORT_FILENAME,
    LOADER_ID,
    NEUTRAL_SEVERITY_STYLE,
    REQUEST_ERROR_ID,
    REQUEST_FAILED_MESSAGE,
    RESULT_CONTAINER_ID,
    SERVICE_CHART_ID,
    SEVERITY_STYLES,
    TIER_BUTTONS_ID,
    TIERS,
    UPLOAD_FORM_ID,
)
from spendscope.contracts import AnalysisResult, Anomaly, ChartSpec, CostSummary
from spendscope.export import analysis_csv_data_uri

_PANEL = "bg-slate-800/50 p-6 rounded-lg border border-slate-700"
_TIER_BASE_CLASSES = "tier-btn px-4 py-2 text-sm font-semibold rounded-md transition-colors"
_TIER_ACTIVE_CLASSES = "bg-cyan-500 text-slate-900"
_TIER_INACTIVE_CLASSES = "bg-slate-700 hover:bg-slate-600 text-slate-300"
# Failed or unreachable requests swap nothing, so the form has to be shown again.
_RESTORE_FORM_JS = (
    "this.classList.remove('hidden'); "
    f"document.getElementById('{REQUEST_ERROR_ID}').classList.remove('hidden')"
)


def format_currency(value: Optional[float]) -> str:
    """Dollar amount with thousands separators and at most three decimals."""
    amount = float(value or 0.0)
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return f"${text}"


def severity_style(severity: str) -> str:
    return SEVERITY_STYLES.get(severity, NEUTRAL_SEVERITY_STYLE)


def narrative_paragraphs(narrative: str) -> list[str]:
    return [line.strip() for line in (narrative or "").split("\n") if line.strip()]


def _stat_card(label: str, value: str, accent: str) -> str:
    return (
        '<div class="bg-slate-800 p-6 rounded-lg border border-slate-700 flex items-start gap-4">'
        f'<div class="flex-shrink-0 w-12 h-12 rounded-lg {accent}"></div>'
        f'<div><p class="text-sm text-slate-400">{html.escape(label)}</p>'
        f'<p class="text-2xl font-bold text-white">{html.escape(value)}</p></div>'
        "</div>"
    )


def render_stat_cards(summary: CostSummary) -> str:
    cards = [
        _stat_card("Total Cost", format_currency(summary.total_cost), "bg-green-500/20"),
        _stat_card("Potential Savings", format_currency(summary.potential_savings), "bg-cyan-500/20"),
        _stat_card("Top Anomaly Service", summary.top_anomaly_service or "n/a", "bg-amber-500/20"),
    ]
    return '<div class="grid md:grid-cols-3 gap-6">' + "".join(cards) + "</div>"


def render_anomaly_card(anomaly: Anomaly) -> str:
    style = severity_style(anomaly.severity)
    return (
        f'<div class="anomaly-card p-4 rounded-lg border {style}">'
        '<div class="flex justify-between items-center">'
        f'<span class="font-bold text-white">{html.escape(anomaly.date)}</span>'
        f'<span class="text-sm font-semibold px-2 py-0.5 rounded-full {style}">'
        f"{html.escape(anomaly.severity)}</span></div>"
        f'<p class="text-slate-300 my-2">{html.escape(anomaly.description)}</p>'
        '<p class="text-lg font-bold text-white text-right">'
        f"Impact: {html.escape(format_currency(anomaly.estimated_impact))}</p>"
        "</div>"
    )


def _chart_panel(title: str, mount_id: str) -> str:
    return (
        f'<div class="{_PANEL}"><h3 class="text-xl font-bold text-white mb-4">{html.escape(title)}</h3>'
        f'<div class="h-[300px]"><canvas id="{mount_id}"></canvas></div></div>'
    )


def _action_controls(result: AnalysisResult) -> str:
    download_href = html.escape(analysis_csv_data_uri(result))
    return (
        '<div class="text-center pt-6 flex items-center justify-center gap-4">'
        f'<a href="{download_href}" download="{EXPORT_FILENAME}" '
        'class="bg-slate-700 hover:bg-slate-600 text-white font-bold py-3 px-6 rounded-lg">'
        "Download CSV</a>"
        f'<button hx-get="/dashboard.html" hx-target="#{RESULT_CONTAINER_ID}" hx-swap="innerHTML" '
        'class="bg-cyan-500 hover:bg-cyan-400 text-slate-900 font-bold py-3 px-6 rounded-lg">'
        "Analyze Another Report</button>"
        "</div>"
    )


def render_analysis_html(result: AnalysisResult) -> str:
    """Render the dashboard fragment for one analysis."""
    narrative_html = "".join(
        f"<p>{html.escape(paragraph)}</p>" for paragraph in narrative_paragraphs(result.narrative)
    )
    anomaly_cards = "".join(render_anomaly_card(anomaly) for anomaly in result.anomalies)
    return (
        '<div class="space-y-6">'
        + render_stat_cards(result.summary)
        + f'<div class="{_PANEL}"><h3 class="text-xl font-bold text-white mb-4">AI Narrative Analysis</h3>'
        + f'<div class="prose prose-invert max-w-none">{narrative_html}</div></div>'
        + '<div class="grid lg:grid-cols-2 gap-6">'
        + _chart_panel("Cost Trend", COST_CHART_ID)
        + _chart_panel("Spend by Service", SERVICE_CHART_ID)
        + "</div>"
        + f'<div class="{_PANEL}"><h3 class="text-xl font-bold text-white mb-4">Detected Anomalies</h3>'
        + f'<div class="grid md:grid-cols-2 lg:grid-cols-3 gap-4">{anomaly_cards}</div></div>'
        + _action_controls(result)
        + "</div>"
    )


def render_chart_payloads(charts: Mapping[str, ChartSpec]) -> str:
    """Embed chart configs as JSON blocks the page script hands to Chart.js."""
    blocks = []
    for mount_id, spec in charts.items():
        payload = json.dumps(spec.to_chartjs_config(), separators=(",", ":"))
        payload = payload.replace("</", "<\\/")
        blocks.append(
            f'<script type="application/json" data-chart-mount="{html.escape(mount_id)}">'
            f"{payload}</script>"
        )
    return "".join(blocks)


def render_error_html(message: str) -> str:
    return (
        '<div class="text-center p-8 bg-red-900/20 border border-red-500 rounded-lg">'
        '<h3 class="text-xl font-bold text-red-400">Analysis Failed</h3>'
        f'<p class="text-red-300 mt-2">{html.escape(message)}</p>'
        f'<button hx-get="/dashboard.html" hx-target="#{RESULT_CONTAINER_ID}" hx-swap="innerHTML" '
        'class="mt-4 bg-red-500 hover:bg-red-400 text-white font-bold py-2 px-4 rounded-md">'
        "Try Again</button>"
        "</div>"
    )


def render_configuration_error_html(message: str) -> str:
    return (
        '<div class="bg-red-900 text-red-200 p-4"><strong>'
        "Initialization Error: Failed to start the AI service. This could be due to a network "
        f"issue or invalid configuration. Details: {html.escape(message)}"
        "</strong></div>"
    )


def render_notice_html(message: str) -> str:
    return f'<div class="notice p-3 mb-4 rounded-md bg-amber-900/30 text-amber-300" role="alert">{html.escape(message)}</div>'


def render_tier_buttons(selected_tier: Optional[str]) -> str:
    buttons = []
    for tier in TIERS:
        state = _TIER_ACTIVE_CLASSES if tier == selected_tier else _TIER_INACTIVE_CLASSES
        buttons.append(
            f'<button id="tier-btn-{tier}" hx-post="/tier/{tier}" hx-target="#{TIER_BUTTONS_ID}" '
            f'hx-swap="outerHTML" class="{_TIER_BASE_CLASSES} {state}">{tier}</button>'
        )
    return f'<div id="{TIER_BUTTONS_ID}" class="flex gap-2">' + "".join(buttons) + "</div>"


def render_upload_view(selected_tier: Optional[str] = None, notice: Optional[str] = None) -> str:
    """Upload form fragment shown in the idle state."""
    notice_html = render_notice_html(notice) if notice else ""
    return (
        '<div class="space-y-6">'
        + render_tier_buttons(selected_tier)
        + notice_html
        + f'<div id="{REQUEST_ERROR_ID}" class="hidden notice p-3 mb-4 rounded-md bg-red-900/30 text-red-300">'
        f'{html.escape(REQUEST_FAILED_MESSAGE)}</div>'
        + f'<form id="{UPLOAD_FORM_ID}" hx-post="/analyze" hx-encoding="multipart/form-data" '
        f'hx-target="#{RESULT_CONTAINER_ID}" hx-swap="innerHTML" hx-indicator="#{LOADER_ID}" '
        "hx-on::before-request=\"this.classList.add('hidden')\" "
        f"hx-on::response-error=\"{_RESTORE_FORM_JS}\" "
        f"hx-on::send-error=\"{_RESTORE_FORM_JS}\" "
        'class="bg-slate-800/50 p-6 rounded-lg border border-slate-700">'
        '<label class="block text-slate-300 mb-2" for="file">Upload a cloud billing CSV export</label>'
        '<input type="file" id="file" name="file" accept=".csv,text/csv" />'
        '<button type="submit" class="mt-4 bg-cyan-500 text-slate-900 font-bold py-2 px-4 rounded-md">'
        "Analyze Costs</button>"
        "</form>"
        "</div>"
    )


_CHART_BOOTSTRAP = """
document.body.addEventListener('htmx:afterSwap', function () {
  document.querySelectorAll('script[data-chart-mount]').forEach(function (node) {
    var canvas = document.getElementById(node.dataset.chartMount);
    if (!canvas) { return; }
    var existing = Chart.getChart(canvas);
    if (existing) { existing.destroy(); }
    new Chart(canvas.getContext('2d'), JSON.parse(node.textContent));
  });
});
"""


def render_page_shell(body_override: Optional[str] = None) -> str:
    """Full HTML document. ``body_override`` replaces the whole body (fatal errors)."""
    if body_override is not None:
        body = body_override
    else:
        body = (
            '<main class="max-w-6xl mx-auto p-6">'
            '<h1 class="text-3xl font-bold text-white mb-6">Cloud Cost Anomaly Analyzer</h1>'
            f'<div id="{LOADER_ID}" class="htmx-indicator text-slate-300">Analyzing your cost data...</div>'
            f'<div id="{RESULT_CONTAINER_ID}" hx-get="/dashboard.html" hx-trigger="load" hx-swap="innerHTML"></div>'
            "</main>"
            f"<script>{_CHART_BOOTSTRAP}</script>"
        )
    return (
        "<!doctype html>"
        '<html lang="en"><head><meta charset="utf-8" />'
        '<meta name="viewport" content="width=device-width, initial-scale=1" />'
        "<title>Cloud Cost Anomaly Analyzer</title>"
        '<script src="https://cdn.tailwindcss.com"></script>'
        '<script src="https://unpkg.com/htmx.org@1.9.12"></script>'
        '<script src="https://cdn.jsdelivr.net/npm/chart.js"></script>'
        '</head><body class="bg-slate-900">'
        f"{body}"
        "</body></html>"
    )
