"""Failure taxonomy for the analysis pipeline."""

from __future__ import annotations


class AnalysisError(RuntimeError):
    """Base class for failures surfaced to the user as an error fragment."""

    recoverable = True


class ConfigurationError(AnalysisError):
    """No usable credential or provider; fatal to the whole session."""

    recoverable = False


class EmptyResponseError(AnalysisError):
    """The generation backend returned no text payload."""


class MalformedResponseError(AnalysisError):
    """The payload could not be parsed into the analysis shape."""


class TransportError(AnalysisError):
    """Network or backend failure while issuing the generation request."""
