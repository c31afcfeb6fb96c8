"""Filesystem helpers shared by the config layer and the CLI.

No third-party imports here so it can be loaded before anything else.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


def _looks_like_repo_root(path: Path, markers: Sequence[str]) -> bool:
    """Return ``True`` if *path* contains any of the *marker* files/dirs."""
    for marker in markers:
        if (path / marker).exists():
            return True
    return False


def project_root(markers: Sequence[str] | None = None) -> Path:
    """Return the absolute ``Path`` of the repo root.

    Walks *up* from this file until a directory holding one of *markers*
    (default: ``pyproject.toml`` or ``.git``) is found. Falls back to the
    current working directory when the package is installed outside a
    checkout, so relative ``config/`` and ``data/`` paths still resolve
    against wherever the command was launched.
    """
    if markers is None:
        markers = ("pyproject.toml", ".git")

    cur = Path(__file__).resolve()
    for parent in cur.parents:
        if _looks_like_repo_root(parent, markers):
            return parent
    return Path.cwd()


def resolve(path: str | Path, root: Path | None = None) -> Path:
    """Anchor a relative *path* at *root* (default: ``project_root()``)."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    return (root or project_root()) / p


__all__ = [
    "project_root",
    "resolve",
]
