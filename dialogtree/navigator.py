"""Walking a dialog tree.

Provides the Navigator class that runs one node after another, keeping
the breadcrumb trail of menu choices that led to the current node.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import DEFAULT_SETTINGS, DialogSettings
from .errors import DialogRunError
from .nodes import ChildBinding, DialogNode, MenuNode

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """The option ``key`` chosen in ``menu``, shown as ``crumb``."""

    menu: MenuNode
    crumb: str
    key: str | None = None


class Navigator:
    """Drives a dialog tree until a node has nothing to show next.

    Choosing an option pushes a frame; coming back to a menu that is
    already on the trail (for instance as the ``next`` of a leaf) pops
    everything chosen from it onwards.
    """

    def __init__(
        self,
        root: DialogNode,
        settings: DialogSettings = DEFAULT_SETTINGS,
        *,
        root_crumb: str = "",
        back_on_cancel: bool = True,
    ):
        """Initialize the navigator.

        Args:
            root: First node to show
            settings: Supplies the crumb separator
            root_crumb: Leading crumb shown on every dialog
            back_on_cancel: Return to the parent menu when a dialog is cancelled
        """
        self.root = root
        self.settings = settings
        self.root_crumb = root_crumb
        self.back_on_cancel = back_on_cancel
        self.menu_stack: list[Frame] = []
        self._default_key: str | None = None

    def push_menu(self, menu: MenuNode, crumb: str, key: str | None = None) -> None:
        self.menu_stack.append(Frame(menu, crumb, key))

    def pop_menu(self) -> Frame | None:
        if self.menu_stack:
            return self.menu_stack.pop()
        return None

    def get_breadcrumb(self) -> str:
        """Join the crumbs of the current trail, e.g. "Main → Network → Wifi"."""
        crumbs = [frame.crumb for frame in self.menu_stack]
        if self.root_crumb:
            crumbs.insert(0, self.root_crumb)
        return self.settings.crumb_separator.join(crumbs)

    def _rewind_to(self, node: DialogNode) -> None:
        for index, frame in enumerate(self.menu_stack):
            if frame.menu is node:
                del self.menu_stack[index:]
                return

    async def step(self, node: DialogNode) -> DialogNode | None:
        """Show ``node`` and return the node to show after it."""
        self._rewind_to(node)
        default_key, self._default_key = self._default_key, None
        breadcrumbs = self.get_breadcrumb()

        try:
            if isinstance(node, MenuNode):
                result = await node.advance(breadcrumbs, default_key=default_key)
            else:
                result = await node.advance(breadcrumbs)
        except DialogRunError as e:
            if not (e.cancelled and self.back_on_cancel):
                raise
            frame = self.pop_menu()
            if frame is None:
                logger.info("Dialog cancelled at the top level, ending walk")
                return None
            logger.debug(f"Dialog cancelled, back to menu at '{frame.crumb}'")
            self._default_key = frame.key
            return frame.menu

        if isinstance(result, ChildBinding):
            self.push_menu(result.menu, result.crumb(), result.option.key)
            self._default_key = result.option.next_default_key
            return result.node
        return result

    async def run(self) -> None:
        """Walk from the root until no next node is returned."""
        node: DialogNode | None = self.root
        while node is not None:
            node = await self.step(node)
