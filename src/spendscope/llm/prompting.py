"""Prompt builders shared by generation backends."""

from __future__ import annotations


def build_cost_analysis_prompt(csv_text: str) -> str:
    """Build the cost-anomaly analysis prompt with the CSV embedded verbatim."""
    return f"""You are an expert Cloud Financial Operations (FinOps) analyst. Analyze the following cloud cost data (CSV format) and identify cost anomalies.

CSV Data:
```csv
{csv_text}
```

Provide a complete analysis in JSON format including:
- summary: totalCost, potentialSavings, topAnomalyService
- narrative: a detailed narrative, one paragraph per line
- costTrend: one entry per date with date, cost and anomaly (the anomalous cost, or null when the point is normal)
- anomalies: date, description, severity (High, Medium or Low) and estimatedImpact in USD
- serviceBreakdown: service, cost and percentage of total spend

Output ONLY the JSON object.
"""
