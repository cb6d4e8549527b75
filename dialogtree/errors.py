"""Exceptions raised while running dialog nodes."""

from __future__ import annotations

# dialog(1) exit statuses that mean the user backed out rather than failed
CANCEL_STATUSES = frozenset({1, 255})


class DialogError(Exception):
    """Base exception for dialog invocation and navigation."""


class DialogRunError(DialogError):
    """Raised when the external program cannot be started or exits non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output

    @property
    def cancelled(self) -> bool:
        """True when the user pressed Cancel or Esc."""
        return self.returncode in CANCEL_STATUSES


class DialogConfigError(DialogError):
    """Raised when a node is missing a callback or result cell."""


class DialogSelectionError(DialogError):
    """Raised when a menu returns a key that matches none of its options."""

    def __init__(self, key: str) -> None:
        super().__init__(f"returned option '{key}' not found")
        self.key = key


class DialogProducerError(DialogError):
    """Raised when the producer feeding a program box fails."""
