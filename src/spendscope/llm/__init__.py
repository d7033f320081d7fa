"""Structured-generation backends and their request parameters."""

from spendscope.llm.base import StructuredBackend
from spendscope.llm.claude_adapter import ClaudeAdapter
from spendscope.llm.gemini_adapter import GeminiAdapter
from spendscope.llm.gpt_adapter import GPTAdapter
from spendscope.llm.prompting import build_cost_analysis_prompt
from spendscope.llm.router import BACKEND_FACTORIES, build_backend
from spendscope.llm.schema import ANALYSIS_SCHEMA, to_json_schema

__all__ = [
    "ANALYSIS_SCHEMA",
    "BACKEND_FACTORIES",
    "ClaudeAdapter",
    "GPTAdapter",
    "GeminiAdapter",
    "StructuredBackend",
    "build_backend",
    "build_cost_analysis_prompt",
    "to_json_schema",
]
