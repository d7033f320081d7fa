"""Adapter interface for structured-generation backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class StructuredBackend(ABC):
    """One schema-constrained request/response round-trip per call."""

    provider_name: str = "unknown"

    @abstractmethod
    def generate_structured(self, prompt: str, schema: dict[str, Any]) -> Optional[str]:
        """Return the raw text payload, or ``None`` when the backend sent none."""
