"""Configuration, constants, and defaults for dialog invocation."""

import os
from dataclasses import dataclass

import dotenv
from rich.console import Console

DIALOG_PROGRAM = "dialog"
DEFAULT_HEIGHT = 20
DEFAULT_WIDTH = 60
DEFAULT_TITLE = "Title"
ERROR_DIALOGRC = "/etc/error.dialogrc"
OUTPUT_FD_FLAG = "--output-fd"

# The external program turns this two-character sequence into a line break
LINE_BREAK = "\\n"

# Color scheme
COLORS = {
    "primary": "#10b981",
    "dim": "#6b7280",
    "error": "#ef4444",
    "warning": "#f59e0b",
}


@dataclass(frozen=True)
class DialogSettings:
    """Defaults shared by every node of a dialog tree.

    Nodes receive an instance explicitly, so two trees in the same process
    can use different programs, titles, or rc files.
    """

    program: str = DIALOG_PROGRAM
    title: str = DEFAULT_TITLE
    height: int = DEFAULT_HEIGHT
    width: int = DEFAULT_WIDTH
    output_fd_flag: str = OUTPUT_FD_FLAG
    dialogrc: str | None = None
    error_dialogrc: str | None = ERROR_DIALOGRC
    crumb_separator: str = " → "

    @classmethod
    def from_env(cls) -> "DialogSettings":
        """Build settings from ``DIALOGTREE_*`` variables (and a ``.env`` file)."""
        dotenv.load_dotenv()
        defaults = cls()
        return cls(
            program=os.environ.get("DIALOGTREE_PROGRAM", defaults.program),
            title=os.environ.get("DIALOGTREE_TITLE", defaults.title),
            height=_env_int("DIALOGTREE_HEIGHT", defaults.height),
            width=_env_int("DIALOGTREE_WIDTH", defaults.width),
            dialogrc=os.environ.get("DIALOGTREE_DIALOGRC") or defaults.dialogrc,
            error_dialogrc=os.environ.get("DIALOGTREE_ERROR_DIALOGRC", defaults.error_dialogrc),
            crumb_separator=os.environ.get(
                "DIALOGTREE_CRUMB_SEPARATOR", defaults.crumb_separator
            ),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


DEFAULT_SETTINGS = DialogSettings()

console = Console()
