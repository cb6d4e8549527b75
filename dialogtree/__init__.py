"""Navigable dialog(1) trees.

Describes a tree of terminal dialogs (messages, pauses, menus, input
boxes, checklists, live program output) and walks it, running the
external dialog program for each node and keeping a breadcrumb trail of
menu choices.

Key components:
- Nodes: one dataclass per dialog kind, each with ``advance(breadcrumbs)``
- Process: runs the program with a separate result channel
- Navigator: the walk loop and breadcrumb stack
- DialogSettings: program, title and geometry defaults
"""

from .config import DEFAULT_SETTINGS, DialogSettings
from .errors import (
    DialogConfigError,
    DialogError,
    DialogProducerError,
    DialogRunError,
    DialogSelectionError,
)
from .navigator import Navigator
from .nodes import (
    Cell,
    CheckItem,
    ChecklistNode,
    ChildBinding,
    DialogNode,
    InputNode,
    MenuNode,
    MenuOption,
    MessageNode,
    MixedFormNode,
    PauseNode,
    ProgramOutputNode,
)
from .process import command_producer, run_dialog, run_dialog_streaming

__all__ = [
    "DEFAULT_SETTINGS",
    "Cell",
    "CheckItem",
    "ChecklistNode",
    "ChildBinding",
    "DialogConfigError",
    "DialogError",
    "DialogNode",
    "DialogProducerError",
    "DialogRunError",
    "DialogSelectionError",
    "DialogSettings",
    "InputNode",
    "MenuNode",
    "MenuOption",
    "MessageNode",
    "MixedFormNode",
    "Navigator",
    "PauseNode",
    "ProgramOutputNode",
    "command_producer",
    "run_dialog",
    "run_dialog_streaming",
]
