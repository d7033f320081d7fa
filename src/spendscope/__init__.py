"""SpendScope: cloud cost anomaly analysis.

Turns a cloud-billing CSV export into a structured anomaly analysis through a
schema-constrained generation request, then projects that analysis into
dashboard HTML fragments and chart-ready datasets.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Public API exports
from spendscope.analyzer import analyze_cost_csv, parse_analysis_payload, strip_code_fences
from spendscope.charts import project_charts, project_cost_trend, project_service_breakdown
from spendscope.config import AppSettings, load_settings
from spendscope.contracts import (
    AnalysisResult,
    Anomaly,
    ChartDataset,
    ChartSpec,
    CostSummary,
    CostTrendPoint,
    ServiceCost,
    Severity,
)
from spendscope.errors import (
    AnalysisError,
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    TransportError,
)
from spendscope.llm import (
    ANALYSIS_SCHEMA,
    ClaudeAdapter,
    GeminiAdapter,
    GPTAdapter,
    StructuredBackend,
    build_backend,
    build_cost_analysis_prompt,
    to_json_schema,
)
from spendscope.orchestrator import AnalysisSession, SessionState, SwapHooks
from spendscope.render import render_analysis_html, render_error_html

__all__ = [
    # Version
    "__version__",
    # Configuration
    "AppSettings",
    "load_settings",
    # Contracts
    "AnalysisResult",
    "Anomaly",
    "CostSummary",
    "CostTrendPoint",
    "ServiceCost",
    "Severity",
    "ChartDataset",
    "ChartSpec",
    # Errors
    "AnalysisError",
    "ConfigurationError",
    "EmptyResponseError",
    "MalformedResponseError",
    "TransportError",
    # Generation backends
    "ANALYSIS_SCHEMA",
    "to_json_schema",
    "build_cost_analysis_prompt",
    "StructuredBackend",
    "GeminiAdapter",
    "GPTAdapter",
    "ClaudeAdapter",
    "build_backend",
    # Analysis pipeline
    "analyze_cost_csv",
    "parse_analysis_payload",
    "strip_code_fences",
    "render_analysis_html",
    "render_error_html",
    "project_cost_trend",
    "project_service_breakdown",
    "project_charts",
    # Orchestration
    "AnalysisSession",
    "SessionState",
    "SwapHooks",
]
