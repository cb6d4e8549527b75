"""Title and geometry resolution shared by all dialog nodes."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from .config import DEFAULT_HEIGHT, DEFAULT_SETTINGS, DEFAULT_WIDTH, DialogSettings


def terminal_size() -> os.terminal_size | None:
    """Return the controlling terminal's size, or None when it can't be read."""
    try:
        return os.get_terminal_size(sys.stdin.fileno())
    except (OSError, ValueError):
        return None


@dataclass(kw_only=True)
class Sizing:
    """Title, width, height and rc file of a dialog.

    A width or height of 0 selects the default from settings. A negative
    value, on the node or in settings, is an offset from the terminal size
    (-4 on an 80 column terminal gives 76). A positive value is used as is.
    """

    title: str | None = None
    width: int = 0
    height: int = 0
    dialogrc: str | None = None
    settings: DialogSettings = field(default=DEFAULT_SETTINGS, repr=False)

    def resolve_title(self) -> str:
        return self.title or self.settings.title

    def resolve_width(self) -> int:
        return _resolve(self.width, "columns", self.settings.width, DEFAULT_WIDTH)

    def resolve_height(self) -> int:
        return _resolve(self.height, "lines", self.settings.height, DEFAULT_HEIGHT)

    def resolve_dialogrc(self) -> str | None:
        return self.dialogrc or self.settings.dialogrc

    def base_args(self) -> list[str]:
        return ["--title", self.resolve_title()]


def _resolve(configured: int, dimension: str, default: int, fallback: int) -> int:
    # A node value of 0 defers to settings, which may itself be an offset
    value = configured or default
    if value > 0:
        return value
    if value < 0:
        size = terminal_size()
        if size is not None:
            return getattr(size, dimension) + value
    return fallback
