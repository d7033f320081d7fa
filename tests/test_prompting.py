from __future__ import annotations

from spendscope.llm.prompting import build_cost_analysis_prompt


def test_prompt_embeds_csv_verbatim_in_fenced_block() -> None:
    csv_text = "date,service,cost\n2024-01-01,EC2,120.5\n2024-01-02,\"S3, standard\",4"
    prompt = build_cost_analysis_prompt(csv_text)
    assert f"```csv\n{csv_text}\n```" in prompt


def test_prompt_assigns_role_and_lists_sections() -> None:
    prompt = build_cost_analysis_prompt("a,b\n1,2")
    assert "FinOps" in prompt
    for section in ("summary", "narrative", "costTrend", "anomalies", "serviceBreakdown"):
        assert section in prompt
    assert prompt.rstrip().endswith("Output ONLY the JSON object.")
