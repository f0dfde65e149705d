"""Error taxonomy for the dashboard client.

Every failure at the network boundary is raised as an ``ApiError`` by the
gateway. Engine components re-raise it as the error kind that matches the
data they own, so callers can apply that kind's retention policy:

- ``SchemaFetchError``: the create form degrades to its unavailable state.
- ``RegistryFetchError``: the previous input list is kept, the error is shown.
- ``PollError``: log buffer keeps its last window, upload status drops to absent.
- ``MutationError``: create / send-test failed, the user's input is kept.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DashboardError(Exception):
    """Base error carrying a user-facing message and optional details."""

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ApiError(DashboardError):
    """Typed gateway error; ``status`` is None for transport or parse failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status = status


class SchemaFetchError(DashboardError):
    """An input type's field schema could not be fetched."""


class RegistryFetchError(DashboardError):
    """The list of provisioned inputs could not be fetched."""


class PollError(DashboardError):
    """A periodic poll failed. Never surfaced to the user."""

    def __init__(self, kind: str, message: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.kind = kind


class MutationError(DashboardError):
    """A create or send-test call was rejected or failed."""


class FormUnavailableError(DashboardError):
    """Submission was attempted before a schema was loaded."""


def message_or(exc: DashboardError, fallback: str) -> str:
    """Return the error's message, or ``fallback`` when the backend sent no text."""
    text = (exc.message or "").strip()
    return text or fallback
