"""Project root detection: walk up from a start directory to the .claude marker."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

_MODULE_DIR = Path(__file__).resolve().parent


def find_project_root(
    start: Path | str | None = None,
    marker: str = ".claude",
    *,
    is_dir: Callable[[Path], bool] | None = None,
    cwd: Callable[[], Path] | None = None,
) -> Path:
    """Return the nearest ancestor of ``start`` (inclusive) containing ``marker``.

    Falls back to the current working directory when the walk reaches the
    filesystem root without a match. Never raises.

    Args:
        start: Directory to begin at. Defaults to this package's directory.
        marker: Name of the subdirectory that marks a project root.
        is_dir: Existence check, injectable for tests. Defaults to Path.is_dir.
        cwd: Fallback provider. Defaults to Path.cwd.
    """
    check = is_dir or Path.is_dir
    current = Path(start) if start is not None else _MODULE_DIR

    while True:
        if check(current / marker):
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent

    return (cwd or Path.cwd)()
