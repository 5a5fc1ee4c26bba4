"""Exceptions raised by channel propagation operations.

Policy denial is never an exception: the gate evaluators return ``False``.
Only store I/O failures surface as errors.
"""

from __future__ import annotations


class PropagationError(Exception):
    """Base class for channel propagation failures."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class StoreError(PropagationError):
    """Raised when a list, get, create or delete against the store fails."""


class CleanupError(PropagationError):
    """Raised when one or more deletes fail during a channel cleanup.

    Every delete is attempted before this is raised, and every failure is
    kept as an ``(identity, cause)`` pair.
    """

    def __init__(
        self,
        channel: str,
        failures: list[tuple[str, Exception]],
        deleted: list[str] | None = None,
    ):
        self.channel = channel
        self.failures = failures
        self.deleted = deleted or []
        details = "\n".join(f"{key}: {cause}" for key, cause in failures)
        super().__init__(
            f"Failed to delete {len(failures)} deployable(s) for channel {channel}",
            details=details,
        )
