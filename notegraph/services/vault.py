"""Filesystem access for vault notes."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Tuple

from ..models.vault import VaultConfig

NOTE_EXTENSIONS = (".md", ".markdown")
VCS_DIRECTORIES = frozenset({".git", ".hg", ".svn"})


class VaultError(Exception):
    """Raised when a vault cannot be opened or used."""


class VaultNotOpenError(VaultError):
    """Raised when an operation needs an open vault and none is open."""

    def __init__(self, message: str = "No vault open") -> None:
        super().__init__(message)


def is_note_file(name: str) -> bool:
    return name.lower().endswith(NOTE_EXTENSIONS)


def _is_skipped(name: str) -> bool:
    return name.startswith(".") or name in VCS_DIRECTORIES


def validate_note_path(note_path: str) -> Tuple[bool, str]:
    """
    Validate a relative Markdown path.

    Returns (is_valid, message). Message is empty when valid.
    """
    if not note_path or len(note_path) > 256:
        return False, "Path must be 1-256 characters"
    if not is_note_file(note_path):
        return False, "Path must end with .md or .markdown"
    if "\\" in note_path:
        return False, "Path must use Unix separators (/)"
    if note_path.startswith("/"):
        return False, "Path must be relative (no leading /)"
    if ".." in note_path.split("/"):
        return False, "Path must not contain '..'"
    return True, ""


def sanitize_path(vault_root: Path, note_path: str) -> Path:
    """
    Validate and resolve a note path within the vault.

    Raises ValueError for invalid paths or paths escaping the vault root.
    """
    is_valid, message = validate_note_path(note_path)
    if not is_valid:
        raise ValueError(message)
    vault = Path(vault_root).resolve()
    full_path = (vault / note_path).resolve()
    if not full_path.is_relative_to(vault):
        raise ValueError(f"Path escapes vault root: {note_path}")
    return full_path


def iter_note_paths(vault_root: Path) -> Iterator[str]:
    """
    Yield vault-relative, forward-slash paths of every note file.

    Hidden entries and version-control directories are skipped; directory
    listing errors are ignored so one unreadable folder does not stop a walk.
    """
    root = Path(vault_root)
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if not _is_skipped(name))
        base = Path(current)
        for filename in sorted(filenames):
            if _is_skipped(filename) or not is_note_file(filename):
                continue
            yield (base / filename).relative_to(root).as_posix()


def read_text(vault_root: Path, note_path: str) -> str:
    """Read a note as UTF-8 text. OS and decode errors propagate."""
    return sanitize_path(vault_root, note_path).read_text(encoding="utf-8")


def read_listed_text(vault_root: Path, note_path: str) -> str:
    """
    Read a path yielded by ``iter_note_paths`` as UTF-8 text.

    Listed paths come from the filesystem itself, so they skip the checks
    applied to caller-supplied paths (length, backslashes).
    """
    return (Path(vault_root) / note_path).read_text(encoding="utf-8")


def describe_vault(vault_root: str | Path) -> VaultConfig:
    """Return vault metadata; raises VaultError when the directory is missing."""
    path = Path(vault_root).expanduser()
    if not path.is_dir():
        raise VaultError(f"Directory does not exist: {vault_root}")
    resolved = path.resolve()
    return VaultConfig(
        path=str(resolved),
        name=resolved.name,
        is_git_repo=(resolved / ".git").exists(),
    )


__all__ = [
    "VaultError",
    "VaultNotOpenError",
    "NOTE_EXTENSIONS",
    "describe_vault",
    "is_note_file",
    "iter_note_paths",
    "read_listed_text",
    "read_text",
    "sanitize_path",
    "validate_note_path",
]
