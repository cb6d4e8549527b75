"""Dialog node variants.

Every node implements ``advance(breadcrumbs)``: it runs one dialog and
returns the node to show next, or None when navigation should end. Input
and checklist results are written into caller-owned :class:`Cell` objects
instead of being returned.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar, runtime_checkable

from .config import LINE_BREAK, DialogSettings
from .errors import DialogConfigError, DialogSelectionError
from .process import Producer, run_dialog, run_dialog_streaming
from .sizing import Sizing

logger = logging.getLogger(__name__)

T = TypeVar("T")

Validator = Callable[[str], tuple[str, bool]]


@runtime_checkable
class DialogNode(Protocol):
    """Anything that can take part in a dialog walk."""

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None: ...


@dataclass
class Cell(Generic[T]):
    """A mutable value owned by the caller and filled in by a node."""

    value: T


@dataclass
class CheckItem:
    label: str
    selected: Cell[bool] | None = None


@dataclass(kw_only=True)
class _DialogBase(Sizing):
    async def _run(self, args: list[str]) -> str:
        return await run_dialog(
            self.base_args() + args,
            settings=self.settings,
            dialogrc=self.resolve_dialogrc(),
        )

    def _geometry(self) -> list[str]:
        return [str(self.resolve_height()), str(self.resolve_width())]


@dataclass(kw_only=True)
class MessageNode(_DialogBase):
    """A message box. Breadcrumbs are not shown."""

    text: str = ""
    next: DialogNode | None = None

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None:
        await self._run(["--msgbox", self.text, *self._geometry()])
        return self.next

    @classmethod
    def for_error(
        cls,
        error: BaseException,
        settings: DialogSettings,
        next: DialogNode | None = None,
    ) -> MessageNode:
        """Build a message box reporting ``error`` with the error rc file."""
        return cls(
            title="Error",
            text=str(error),
            dialogrc=settings.error_dialogrc,
            settings=settings,
            next=next,
        )


@dataclass(kw_only=True)
class PauseNode(_DialogBase):
    """A message shown with a countdown of ``seconds``."""

    text: str = ""
    seconds: int = 0
    next: DialogNode | None = None

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None:
        await self._run(
            [
                "--pause",
                breadcrumbs + LINE_BREAK + self.text,
                *self._geometry(),
                str(self.seconds),
            ]
        )
        return self.next


@dataclass
class MenuOption:
    """One entry of a menu.

    ``crumb`` produces the breadcrumb text for this choice; the label is
    used when it is None.
    """

    key: str
    label: str
    next: DialogNode | None = None
    next_default_key: str | None = None
    crumb: Callable[[], str] | None = None


@dataclass
class ChildBinding:
    """The node chosen from a menu, with its crumb and where it came from.

    ``menu`` and ``option`` are for lookup only; the binding never changes
    them.
    """

    node: DialogNode | None
    crumb: Callable[[], str]
    menu: MenuNode = field(repr=False, compare=False)
    option: MenuOption = field(compare=False)

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None:
        if self.node is None:
            return None
        return await self.node.advance(breadcrumbs)


@dataclass(kw_only=True)
class MenuNode(_DialogBase):
    """A menu whose options are listed afresh on every visit."""

    options: Callable[[], Sequence[MenuOption]]
    text: Callable[[], str] | None = None
    menu_height: int = 0
    default_key: str | None = None

    def resolve_menu_height(self, option_count: int) -> int:
        if self.menu_height > 0:
            return self.menu_height
        return option_count

    async def advance(
        self, breadcrumbs: str = "", *, default_key: str | None = None
    ) -> ChildBinding:
        opts = list(self.options())

        args: list[str] = []
        default_key = default_key or self.default_key
        if default_key:
            args += ["--default-item", default_key]
        text = breadcrumbs
        if self.text is not None:
            text += LINE_BREAK + self.text()
        args += [
            "--menu",
            text,
            *self._geometry(),
            str(self.resolve_menu_height(len(opts))),
        ]
        for opt in opts:
            args += [opt.key, opt.label]

        key = await self._run(args)
        for opt in opts:
            if opt.key == key:
                return ChildBinding(
                    node=opt.next,
                    crumb=opt.crumb or (lambda label=opt.label: label),
                    menu=self,
                    option=opt,
                )
        raise DialogSelectionError(key)


def _check_validation(validate: Validator | None, value: str, kind: str) -> None:
    # The verdict is logged only; navigation continues with the raw value
    if validate is None:
        return
    message, ok = validate(value)
    if not ok:
        logger.warning(f"{kind} value {value!r} failed validation: {message}")


@dataclass(kw_only=True)
class InputNode(_DialogBase):
    """A single-line text prompt, pre-filled with and stored into ``value``."""

    text: Callable[[], str] | None = None
    value: Cell[str] | None = None
    validate: Validator | None = None
    next: DialogNode | None = None

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None:
        if self.value is None:
            raise DialogConfigError("inputbox has no result cell")
        if self.text is None:
            raise DialogConfigError("inputbox has no text callback")

        result = await self._run(
            [
                "--inputbox",
                breadcrumbs + LINE_BREAK + self.text(),
                *self._geometry(),
                self.value.value,
            ]
        )
        _check_validation(self.validate, result, "inputbox")
        self.value.value = result
        return self.next


def parse_checklist_selection(raw: str, item_count: int) -> set[int]:
    """Return the item indices named in ``raw``, ignoring anything else."""
    selected = set()
    for token in re.split(r"\s+", raw.strip()):
        try:
            index = int(token)
        except ValueError:
            continue
        if 0 <= index < item_count:
            selected.add(index)
    return selected


@dataclass(kw_only=True)
class ChecklistNode(_DialogBase):
    """A list of on/off items, tagged by position."""

    text: Callable[[], str] | None = None
    items: list[CheckItem] = field(default_factory=list)
    validate: Validator | None = None
    next: DialogNode | None = None

    def item_args(self) -> list[str]:
        args = []
        for index, item in enumerate(self.items):
            args += [str(index), item.label, "on" if item.selected.value else "off"]
        return args

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None:
        if any(item.selected is None for item in self.items):
            raise DialogConfigError("checklist item has no result cell")
        if self.text is None:
            raise DialogConfigError("checklist has no text callback")

        result = await self._run(
            [
                "--checklist",
                breadcrumbs + LINE_BREAK + self.text(),
                *self._geometry(),
                str(len(self.items)),
                *self.item_args(),
            ]
        )
        _check_validation(self.validate, result, "checklist")

        selected = parse_checklist_selection(result, len(self.items))
        for index, item in enumerate(self.items):
            item.selected.value = index in selected
        return self.next


@dataclass(kw_only=True)
class ProgramOutputNode(_DialogBase):
    """A box showing the live output of ``producer``."""

    text: str = ""
    producer: Producer | None = None
    next: DialogNode | None = None

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None:
        if self.producer is None:
            raise DialogConfigError("programbox has no producer callback")

        await run_dialog_streaming(
            self.base_args()
            + ["--programbox", breadcrumbs + LINE_BREAK + self.text, *self._geometry()],
            self.producer,
            settings=self.settings,
            dialogrc=self.resolve_dialogrc(),
        )
        return self.next


@dataclass(kw_only=True)
class MixedFormNode(_DialogBase):
    """Placeholder for ``--mixedform``, which is not supported."""

    text: str = ""
    form_height: int = 0
    labels: list[str] = field(default_factory=list)

    async def advance(self, breadcrumbs: str = "") -> DialogNode | None:
        raise NotImplementedError("mixed form dialogs are not supported")
