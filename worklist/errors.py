"""
Exception hierarchy for the worklist package.

The query pipeline itself never raises for normal-range input (absent
fields, empty collections, no matches). These errors cover misconfiguration,
data source failures, and invalid arguments such as a non-positive page size.
"""

from __future__ import annotations

from typing import Optional


class WorklistError(Exception):
    """Base class for all worklist errors."""


class ConfigurationError(WorklistError):
    """Raised when a worklist or data source is missing required configuration."""


class FetchError(WorklistError):
    """
    Raised when a data source fails to deliver rows.

    Attributes
    ----------
    status_code : int | None
        HTTP status of the failed response, if the failure came from a response.
    status_text : str | None
        Reason phrase of the failed response.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class ValidationError(WorklistError):
    """Raised for invalid pipeline arguments or questionnaire answers."""


__all__ = ["WorklistError", "ConfigurationError", "FetchError", "ValidationError"]
