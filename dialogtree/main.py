"""Demo entry point: walks a small dialog tree that uses every node kind."""

import argparse
import asyncio
import logging
import shutil
import sys
from dataclasses import dataclass, field, replace

from .config import COLORS, DialogSettings, console
from .errors import DialogError, DialogRunError
from .navigator import Navigator
from .nodes import (
    Cell,
    CheckItem,
    ChecklistNode,
    InputNode,
    MenuNode,
    MenuOption,
    MessageNode,
    PauseNode,
    ProgramOutputNode,
)
from .process import command_producer
from .ui import create_error_panel, create_header_panel, create_results_table

logger = logging.getLogger(__name__)

TOPPINGS = ["Cheese", "Mushrooms", "Olives", "Peppers"]


@dataclass
class DemoState:
    """Values the demo tree writes into."""

    name: Cell[str] = field(default_factory=lambda: Cell(""))
    toppings: list[CheckItem] = field(
        default_factory=lambda: [CheckItem(label, Cell(False)) for label in TOPPINGS]
    )

    def summary(self) -> dict[str, str]:
        chosen = [item.label for item in self.toppings if item.selected.value]
        return {"Name": self.name.value, "Toppings": ", ".join(chosen)}


def _validate_name(value: str) -> tuple[str, bool]:
    if not value.strip():
        return "name must not be empty", False
    return "", True


def build_demo_tree(state: DemoState, settings: DialogSettings) -> MenuNode:
    """Build the demo tree; leaves lead back to the menu they were chosen from."""

    def main_options() -> list[MenuOption]:
        greeting = MessageNode(
            text=f"Hello, {state.name.value or 'stranger'}!",
            settings=settings,
            next=root,
        )
        return [
            MenuOption("1", "Say hello", next=greeting),
            MenuOption(
                "2",
                f"Name ({state.name.value or 'unset'})",
                next=name_input,
                crumb=lambda: "Name",
            ),
            MenuOption("3", "Toppings", next=toppings),
            MenuOption("4", "System info", next=system_info),
            MenuOption("5", "More", next=more, next_default_key="w"),
            MenuOption("q", "Quit"),
        ]

    root = MenuNode(
        options=main_options,
        text=lambda: "Pick something to try.",
        settings=settings,
    )
    name_input = InputNode(
        text=lambda: "What is your name?",
        value=state.name,
        validate=_validate_name,
        height=10,
        settings=settings,
        next=root,
    )
    toppings = ChecklistNode(
        text=lambda: "Choose toppings.",
        items=state.toppings,
        settings=settings,
        next=root,
    )
    system_info = ProgramOutputNode(
        text="uname -a",
        producer=command_producer(["uname", "-a"]),
        height=-4,
        width=-4,
        settings=settings,
        next=root,
    )
    more = MenuNode(
        options=lambda: [
            MenuOption("w", "Wait a moment", next=wait),
            MenuOption("b", "Back", next=root),
        ],
        settings=settings,
    )
    wait = PauseNode(text="Counting down...", seconds=3, height=10, settings=settings, next=more)
    return root


def check_cli_dependencies(settings: DialogSettings) -> None:
    """Exit with a hint when the dialog program is not installed."""
    if shutil.which(settings.program) is None:
        console.print(
            create_error_panel(
                f"[bold]{settings.program}[/bold] was not found on PATH.\n\n"
                "Install it with your package manager (e.g. [cyan]apt install dialog[/cyan])\n"
                "or point [cyan]DIALOGTREE_PROGRAM[/cyan] at a compatible program.",
                title="Missing dependency",
            )
        )
        sys.exit(1)


def parse_args(argv: list[str] | None = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="dialogtree - dialog(1) menu tree demo")
    parser.add_argument("--title", help="Dialog title (default: DIALOGTREE_TITLE or 'Title')")
    parser.add_argument(
        "--width",
        type=int,
        help="Default width; negative values are offsets from the terminal width",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Default height; negative values are offsets from the terminal height",
    )
    parser.add_argument("--log-file", help="Write debug logs to this file")
    parser.add_argument(
        "--no-back",
        action="store_true",
        help="End the walk on Cancel/Esc instead of returning to the parent menu",
    )
    return parser.parse_args(argv)


def settings_from_args(args) -> DialogSettings:
    settings = DialogSettings.from_env()
    overrides = {
        name: value
        for name, value in (("title", args.title), ("width", args.width), ("height", args.height))
        if value is not None
    }
    return replace(settings, **overrides)


async def _show_error(error: DialogError, settings: DialogSettings) -> None:
    try:
        await MessageNode.for_error(error, settings).advance()
    except DialogError as e:
        logger.warning(f"Could not show error dialog: {e}")


async def run_demo(settings: DialogSettings, *, back_on_cancel: bool = True) -> DemoState:
    """Walk the demo tree and return what the user entered.

    Cancel/Esc ends the walk like choosing Quit; other dialog errors are
    shown in an error box and re-raised.
    """
    state = DemoState()
    navigator = Navigator(
        build_demo_tree(state, settings),
        settings,
        root_crumb="Demo",
        back_on_cancel=back_on_cancel,
    )
    try:
        await navigator.run()
    except DialogRunError as e:
        if not e.cancelled:
            logger.error(f"Dialog walk failed at '{navigator.get_breadcrumb()}': {e}")
            await _show_error(e, settings)
            raise
        logger.info(f"Dialog cancelled at '{navigator.get_breadcrumb()}', ending walk")
    except DialogError as e:
        logger.error(f"Dialog walk failed at '{navigator.get_breadcrumb()}': {e}")
        await _show_error(e, settings)
        raise
    return state


def cli_main(argv: list[str] | None = None) -> None:
    """Entry point for console script."""
    args = parse_args(argv)
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    settings = settings_from_args(args)
    check_cli_dependencies(settings)

    try:
        state = asyncio.run(run_demo(settings, back_on_cancel=not args.no_back))
    except DialogError as e:
        console.print(create_error_panel(str(e)))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n\n[yellow]Interrupted[/yellow]")
        sys.exit(0)

    console.print(create_header_panel("dialogtree", "Values collected"))
    console.print(create_results_table(state.summary()))
    console.print("Goodbye!", style=COLORS["primary"])


if __name__ == "__main__":
    cli_main()
