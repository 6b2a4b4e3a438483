"""Tests for relkit.platform.files module."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from relkit.platform.files import atomic_write_text


def test_atomic_write_replaces_content(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text('{"version": "1.0.0"}\n', encoding="utf-8")

    atomic_write_text(path, '{"version": "1.0.1"}\n')

    assert path.read_text(encoding="utf-8") == '{"version": "1.0.1"}\n'


def test_atomic_write_leaves_no_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "bower.json"

    atomic_write_text(path, "{}\n")

    assert sorted(p.name for p in tmp_path.iterdir()) == ["bower.json"]


def test_atomic_write_keeps_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "raven.js"

    atomic_write_text(path, "a\r\nb\n")

    assert path.read_bytes() == b"a\r\nb\n"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
@pytest.mark.parametrize("mode", [0o644, 0o664, 0o755])
def test_atomic_write_keeps_permissions(tmp_path: Path, mode: int) -> None:
    path = tmp_path / "package.json"
    path.write_text("{}\n", encoding="utf-8")
    path.chmod(mode)

    atomic_write_text(path, '{"version": "1.0.1"}\n')

    assert stat.S_IMODE(path.stat().st_mode) == mode


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
def test_atomic_write_through_symlink_keeps_link(tmp_path: Path) -> None:
    real = tmp_path / "shared" / "raven.js"
    real.parent.mkdir()
    real.write_text("VERSION: '1.0.0',\n", encoding="utf-8")
    link = tmp_path / "raven.js"
    link.symlink_to(real)

    atomic_write_text(link, "VERSION: '1.0.1',\n")

    assert link.is_symlink()
    assert real.read_text(encoding="utf-8") == "VERSION: '1.0.1',\n"
    assert sorted(p.name for p in real.parent.iterdir()) == ["raven.js"]
