"""Filesystem helpers."""

from __future__ import annotations

from pathlib import Path

from sheetgeo.common.errors import FileSystemError


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError(f"Cannot create directory {path}: {exc}") from exc


def read_yaml(path: Path):
    import yaml

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_text(path: Path, text: str) -> None:
    """Overwrite ``path`` with ``text`` exactly as given (no newline translation)."""
    ensure_dir(path.parent)
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as exc:
        raise FileSystemError(f"Cannot write {path}: {exc}") from exc


def read_text(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileSystemError(f"Cannot read {path}: {exc}") from exc
