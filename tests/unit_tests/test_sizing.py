"""Unit tests for dialogtree.sizing."""

import os

import pytest

from dialogtree.config import DialogSettings
from dialogtree.sizing import Sizing


@pytest.fixture
def terminal_80x24(monkeypatch):
    monkeypatch.setattr("dialogtree.sizing.terminal_size", lambda: os.terminal_size((80, 24)))


@pytest.fixture
def no_terminal(monkeypatch):
    monkeypatch.setattr("dialogtree.sizing.terminal_size", lambda: None)


def test_positive_values_used_verbatim(terminal_80x24):
    """Test positive geometry is passed through."""
    sizing = Sizing(width=42, height=7)
    assert sizing.resolve_width() == 42
    assert sizing.resolve_height() == 7


def test_zero_uses_defaults(terminal_80x24):
    """Test zero geometry selects the built-in defaults."""
    sizing = Sizing()
    assert sizing.resolve_width() == 60
    assert sizing.resolve_height() == 20


def test_zero_uses_settings_defaults():
    """Test zero geometry selects the defaults from settings."""
    sizing = Sizing(settings=DialogSettings(width=70, height=15))
    assert sizing.resolve_width() == 70
    assert sizing.resolve_height() == 15


def test_negative_is_offset_from_terminal(terminal_80x24):
    """Test negative geometry is an offset from the terminal size."""
    sizing = Sizing(width=-4, height=-2)
    assert sizing.resolve_width() == 76
    assert sizing.resolve_height() == 22


def test_negative_settings_default_is_offset_from_terminal(terminal_80x24):
    """Test a negative default from settings is also a terminal offset."""
    sizing = Sizing(settings=DialogSettings(width=-6, height=-4))
    assert sizing.resolve_width() == 74
    assert sizing.resolve_height() == 20


def test_negative_settings_default_without_terminal(no_terminal):
    """Test a negative settings default falls back to the built-in default."""
    sizing = Sizing(settings=DialogSettings(width=-6, height=-4))
    assert sizing.resolve_width() == 60
    assert sizing.resolve_height() == 20


def test_negative_without_terminal_falls_back(no_terminal):
    """Test negative geometry falls back when the terminal size is unknown."""
    sizing = Sizing(width=-4, height=-2)
    assert sizing.resolve_width() == 60
    assert sizing.resolve_height() == 20


def test_title_and_base_args():
    """Test title resolution and the leading --title arguments."""
    assert Sizing().resolve_title() == "Title"
    assert Sizing(settings=DialogSettings(title="Setup")).base_args() == ["--title", "Setup"]
    assert Sizing(title="Own", settings=DialogSettings(title="Setup")).base_args() == [
        "--title",
        "Own",
    ]


def test_dialogrc_prefers_node_value():
    """Test a node's rc file overrides the one from settings."""
    settings = DialogSettings(dialogrc="/etc/shared.rc")
    assert Sizing(settings=settings).resolve_dialogrc() == "/etc/shared.rc"
    assert Sizing(dialogrc="/etc/own.rc", settings=settings).resolve_dialogrc() == "/etc/own.rc"
    assert Sizing().resolve_dialogrc() is None
