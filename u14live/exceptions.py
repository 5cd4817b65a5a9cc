"""Custom exceptions for the U14 Live match tracker.

All exceptions inherit from :class:`U14LiveError` so callers can catch
the full family with a single ``except U14LiveError`` clause.

Benign races coming from the UI (an invalid swap pair, undo with nothing
to undo, starting a running clock) are not errors and never raise.
"""
from typing import Iterable, List


class U14LiveError(Exception):
    """Base exception for all match tracker errors."""


class RosterError(U14LiveError):
    """Raised when the roster file is missing or malformed."""


class SheetValidationError(U14LiveError):
    """Raised when a match sheet cannot be used to start live tracking."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class MissingPrerequisiteError(U14LiveError):
    """Raised when a flow step runs before the step it depends on.

    Attributes:
        redirect: Name of the step the user should go back to.
    """

    def __init__(self, message: str, redirect: str = "sheet"):
        super().__init__(message)
        self.redirect = redirect


class ConfirmationRequiredError(U14LiveError):
    """Raised when a destructive transition is requested without confirmation."""


class IntervalStateError(U14LiveError):
    """Raised when an interval is opened while another one is still open."""
