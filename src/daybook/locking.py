"""File locking helpers for log appends and note creation."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, TextIO

import portalocker


def lock_path_for(path: Path) -> Path:
    """Return the sidecar lock file used for ``path``."""
    return path.with_name(f".{path.name}.lock")


@contextmanager
def file_lock(path: Path, timeout: float = 10.0) -> Generator[None, None, None]:
    """Acquire an exclusive advisory lock for a file.

    Creates a hidden ``.<name>.lock`` file alongside the target so that
    journal and log directories stay readable.

    Args:
        path: File to lock
        timeout: Seconds to wait for lock

    Raises:
        portalocker.LockException: If lock cannot be acquired
    """
    lock_path = lock_path_for(path)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    with portalocker.Lock(str(lock_path), timeout=timeout):
        yield


@contextmanager
def atomic_write(path: Path, encoding: str = "utf-8") -> Generator[TextIO, None, None]:
    """Write a text file atomically.

    Writes to a temporary file then renames to target path.

    Yields:
        File handle for writing
    """
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(tmp_path, "w", encoding=encoding) as f:
            yield f
        os.replace(tmp_path, path)
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()
        raise


@contextmanager
def locked_append(path: Path, encoding: str = "utf-8", timeout: float = 10.0) -> Generator[TextIO, None, None]:
    """Open a file for appending while holding its lock.

    Yields:
        File handle positioned at the end of the file
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with file_lock(path, timeout=timeout):
        with open(path, "a", encoding=encoding) as f:
            yield f


def create_if_absent(path: Path, content: str, encoding: str = "utf-8", timeout: float = 10.0) -> bool:
    """Create ``path`` with ``content`` unless it already exists.

    Existing files are never overwritten.

    Returns:
        True if the file was created, False if it already existed
    """
    with file_lock(path, timeout=timeout):
        if path.exists():
            return False
        with atomic_write(path, encoding=encoding) as f:
            f.write(content)
        return True
