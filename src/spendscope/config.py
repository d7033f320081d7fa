"""Configuration for the SpendScope analysis service.

Static constants (DOM ids, style classes, palettes, tiers) live at module
level. Runtime settings come from the environment via ``load_settings``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Generation backends
DEFAULT_PROVIDER = "gemini"
GEMINI_DEFAULT_MODEL = "gemini-3-pro-preview"
OPENAI_DEFAULT_MODEL = "gpt-4o"
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"

# Env var names per provider; the first non-empty one wins.
PROVIDER_KEY_ENV_VARS: dict[str, tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
}
PROVIDER_MODEL_ENV_VARS: dict[str, str] = {
    "gemini": "GEMINI_MODEL",
    "openai": "OPENAI_MODEL",
    "anthropic": "ANTHROPIC_MODEL",
}
PROVIDER_DEFAULT_MODELS: dict[str, str] = {
    "gemini": GEMINI_DEFAULT_MODEL,
    "openai": OPENAI_DEFAULT_MODEL,
    "anthropic": ANTHROPIC_DEFAULT_MODEL,
}

# DOM mount points shared by the renderer, the chart projector and the page shell.
RESULT_CONTAINER_ID = "analysis-result"
UPLOAD_FORM_ID = "upload-form"
LOADER_ID = "loader"
REQUEST_ERROR_ID = "request-error"
COST_CHART_ID = "costChart"
SERVICE_CHART_ID = "serviceChart"

# Anomaly severity -> card/badge classes.
SEVERITY_STYLES = {
    "High": "border-red-500 bg-red-900/20 text-red-400",
    "Medium": "border-amber-500 bg-amber-900/20 text-amber-400",
    "Low": "border-sky-500 bg-sky-900/20 text-sky-400",
}
NEUTRAL_SEVERITY_STYLE = "border-slate-600"

# Chart palette
TREND_LINE_COLOR = "#06b6d4"
ANOMALY_MARKER_COLOR = "#f43f5e"
SERVICE_BAR_COLORS = ["#06b6d4", "#0891b2", "#0e7490", "#155e75", "#164e63"]
AXIS_TICK_COLOR = "#94a3b8"
LEGEND_LABEL_COLOR = "#cbd5e1"

# Support tier preference (kept outside the analysis pipeline).
TIERS = ("Developer", "Business", "Enterprise")
DEFAULT_TIER = "Business"
TIER_PREFERENCE_KEY = "selectedTier"
TIER_BUTTONS_ID = "tier-buttons"

EXPORT_FILENAME = "analyzed_cost_report.csv"
EMPTY_SELECTION_MESSAGE = "Please select a file."
REQUEST_FAILED_MESSAGE = "The analysis request could not be completed. Please try again."


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings resolved from the environment."""

    provider: str = DEFAULT_PROVIDER
    api_key: str = ""
    model: str = GEMINI_DEFAULT_MODEL
    base_url: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Build settings from ``env`` (defaults to ``os.environ``)."""
    source = os.environ if env is None else env
    provider = (source.get("SPENDSCOPE_PROVIDER") or DEFAULT_PROVIDER).strip().lower()

    api_key = ""
    for name in PROVIDER_KEY_ENV_VARS.get(provider, ()):
        value = (source.get(name) or "").strip()
        if value:
            api_key = value
            break

    model_env = PROVIDER_MODEL_ENV_VARS.get(provider, "")
    model = (source.get(model_env) or "").strip() or PROVIDER_DEFAULT_MODELS.get(provider, "")
    base_url = (source.get(f"{provider.upper()}_BASE_URL") or "").strip() or None

    origins_raw = source.get("SPENDSCOPE_CORS_ORIGINS", "*")
    origins = tuple(origin.strip() for origin in origins_raw.split(",") if origin.strip())

    return AppSettings(
        provider=provider,
        api_key=api_key,
        model=model,
        base_url=base_url,
        log_level=(source.get("SPENDSCOPE_LOG_LEVEL") or "INFO").strip() or "INFO",
        cors_origins=origins or ("*",),
    )
