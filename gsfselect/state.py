"""Persisting the browser position and bass setting between runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

APP_DIR = "/mnt/SDCARD/Apps/PlayGSF"
STATE_FILE = "state.txt"


@dataclass
class SavedState:
    """Directory shown, selected entry and bass flag.

    ``bass`` is ``None`` when a loaded file carried no bass line.
    """

    path: str = ""
    name: str = ""
    is_dir: bool = False
    bass: bool | None = None


def state_file_path(directory: str | Path = APP_DIR) -> Path:
    """Return the state file path, creating its directory when possible."""
    directory = Path(directory)
    try:
        directory.mkdir(mode=0o755)
    except OSError:
        pass
    return directory / STATE_FILE


def load_state(path: str | Path) -> SavedState | None:
    """Read a saved state; ``None`` if the file cannot be read."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError:
        return None
    saved_path, name, kind, bass = (text.split("\n") + ["", "", "", ""])[:4]
    return SavedState(
        path=saved_path,
        name=name,
        is_dir=kind == "DIR",
        bass=(bass == "1") if bass else None,
    )


def save_state(path: str | Path, state: SavedState) -> None:
    """Write ``state`` as four lines: path, entry name, DIR/FILE, bass flag."""
    lines = [state.path]
    if state.name:
        lines += [state.name, "DIR" if state.is_dir else "FILE"]
    else:
        lines += ["", ""]
    lines.append("1" if state.bass else "0")
    Path(path).write_text(
        "".join(line + "\n" for line in lines),
        encoding="utf-8",
        errors="surrogateescape",
    )