"""Exception hierarchy for termprompt."""

from __future__ import annotations

from typing import Any


class TermPromptError(Exception):
    """Base exception class for termprompt errors."""

    def __init__(self, message: str, details: str = "") -> None:
        self.message = message
        self.details = details
        super().__init__(f"{message}\n\n{details}" if details else message)


class StatusAssignmentError(TermPromptError):
    """Raised when code tries to assign the derived ``status`` of a prompt."""

    def __init__(self, attempted: Any) -> None:
        super().__init__(
            "prompt.status is derived from the lifecycle flags and may not be assigned",
            f"Attempted value: {attempted!r}",
        )
        self.attempted = attempted


class PromptCancelledError(TermPromptError):
    """Raised by ``Prompt.run`` when the prompt was cancelled.

    ``reason`` holds whatever was passed to ``cancel()``.
    """

    def __init__(self, reason: Any = None) -> None:
        message = "Prompt cancelled"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason


class PromptConfigError(TermPromptError):
    """Invalid prompt options or style specification."""


class PromptClosedError(TermPromptError):
    """Raised when a closed prompt is asked to run again."""
