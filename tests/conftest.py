"""Shared fixtures for asset pipeline tests."""

import os
from pathlib import Path
from typing import Callable

import pytest

# A fixed point in time (2023-11-14) so tests never depend on the clock
BASE_MTIME_NS = 1_700_000_000 * 10**9


def set_mtime(path: Path, mtime_ns: int) -> None:
    """Pin both access and modification time of a file."""
    os.utime(path, ns=(mtime_ns, mtime_ns))


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Factory writing a file (creating parents) with an optional pinned mtime."""

    def _write(path: Path, content: str | bytes, mtime_ns: int | None = BASE_MTIME_NS) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        if mtime_ns is not None:
            set_mtime(path, mtime_ns)
        return path

    return _write


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Primary asset directory with an existing cache sub-directory."""
    directory = tmp_path / "public" / "js"
    (directory / "cache").mkdir(parents=True)
    return directory
