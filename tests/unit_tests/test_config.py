"""Unit tests for dialogtree.config and dialogtree.errors."""

import pytest

from dialogtree.config import DEFAULT_SETTINGS, DialogSettings
from dialogtree.errors import DialogRunError
from dialogtree.nodes import parse_checklist_selection


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DIALOGTREE_PROGRAM",
        "DIALOGTREE_TITLE",
        "DIALOGTREE_HEIGHT",
        "DIALOGTREE_WIDTH",
        "DIALOGTREE_DIALOGRC",
        "DIALOGTREE_ERROR_DIALOGRC",
        "DIALOGTREE_CRUMB_SEPARATOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("dialogtree.config.dotenv.load_dotenv", lambda *a, **k: False)
    return monkeypatch


def test_from_env_defaults(clean_env):
    """Test settings from an empty environment equal the defaults."""
    assert DialogSettings.from_env() == DEFAULT_SETTINGS


def test_from_env_overrides(clean_env):
    """Test DIALOGTREE_* variables override the defaults."""
    clean_env.setenv("DIALOGTREE_PROGRAM", "whiptail-compat")
    clean_env.setenv("DIALOGTREE_TITLE", "Installer")
    clean_env.setenv("DIALOGTREE_WIDTH", "-4")
    clean_env.setenv("DIALOGTREE_HEIGHT", "not-a-number")
    clean_env.setenv("DIALOGTREE_DIALOGRC", "/etc/my.rc")
    clean_env.setenv("DIALOGTREE_CRUMB_SEPARATOR", " / ")

    settings = DialogSettings.from_env()

    assert settings.program == "whiptail-compat"
    assert settings.title == "Installer"
    assert settings.width == -4
    assert settings.height == DEFAULT_SETTINGS.height
    assert settings.dialogrc == "/etc/my.rc"
    assert settings.crumb_separator == " / "


def test_settings_are_immutable():
    """Test settings cannot be changed after creation."""
    with pytest.raises(AttributeError):
        DEFAULT_SETTINGS.title = "changed"


@pytest.mark.parametrize(
    ("returncode", "cancelled"),
    [(0, False), (1, True), (2, False), (255, True), (None, False)],
)
def test_run_error_cancelled(returncode, cancelled):
    """Test which exit statuses count as a cancel."""
    assert DialogRunError("x", returncode=returncode).cancelled is cancelled


@pytest.mark.parametrize(
    ("raw", "count", "expected"),
    [
        (" 0 2 ", 3, {0, 2}),
        ("0 foo 5", 3, {0}),
        ("", 3, set()),
        ("1\n2\t0", 3, {0, 1, 2}),
        ("-1 3", 3, set()),
    ],
)
def test_parse_checklist_selection(raw, count, expected):
    """Test parsing of returned checklist indices."""
    assert parse_checklist_selection(raw, count) == expected
