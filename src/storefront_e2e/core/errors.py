"""Failure taxonomy shared by the page-object layer."""
from __future__ import annotations


class StorefrontE2EError(RuntimeError):
    """Base class for errors raised by the suite itself."""


class ConfigurationMissingError(StorefrontE2EError):
    """Raised when the primary configuration file cannot be found."""


class ResourceNotFoundError(StorefrontE2EError, FileNotFoundError):
    """Raised when a required input file (e.g. the search workbook) is absent."""


class DataValidationError(StorefrontE2EError, ValueError):
    """Raised when an external input is present but unusable."""


class TimeoutExceededError(StorefrontE2EError):
    """Raised when a stability wait does not resolve before its timeout."""

    def __init__(self, description: str, timeout_ms: int) -> None:
        super().__init__(f"Timed out after {timeout_ms} ms waiting for {description}")
        self.description = description
        self.timeout_ms = timeout_ms


class ActionFailedError(StorefrontE2EError):
    """Raised when a user action could not be performed on its target."""

    def __init__(self, role_name: str, action: str, reason: str) -> None:
        super().__init__(f"{action} on {role_name} failed: {reason}")
        self.role_name = role_name
        self.action = action


class DiagnosticCaptureError(StorefrontE2EError):
    """Raised internally when a diagnostic artifact cannot be collected.

    Capture helpers always catch and log it; it never reaches a test.
    """
