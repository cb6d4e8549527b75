"""Shared fixtures: a stand-in for the dialog program."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from dialogtree.config import DialogSettings

# Reports its arguments (or, for --programbox, its stdin) on the result
# descriptor and exits with $FAKE_DIALOG_EXIT.
FAKE_DIALOG = """#!{python}
import json
import os
import sys

fd = int(sys.argv[2])
args = sys.argv[3:]
if "--programbox" in args:
    payload = sys.stdin.buffer.read()
else:
    payload = json.dumps(
        {{"flag": sys.argv[1], "args": args, "dialogrc": os.environ.get("DIALOGRC")}}
    ).encode()
os.write(fd, payload)
sys.exit(int(os.environ.get("FAKE_DIALOG_EXIT", "0")))
"""


@pytest.fixture
def fake_dialog(tmp_path: Path) -> Path:
    script = tmp_path / "fake-dialog"
    script.write_text(FAKE_DIALOG.format(python=sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fake_settings(fake_dialog: Path) -> DialogSettings:
    return DialogSettings(program=str(fake_dialog))
