"""Tests for file and directory copying."""

import stat
from pathlib import Path

import pytest

from gotfiles.core.files import copy_dir, copy_file, copy_path


def test_copy_file_creates_parents(tmp_path: Path) -> None:
    """Test copying a file into a directory that does not exist yet."""
    src = tmp_path / "src.txt"
    src.write_bytes(b"set number\n\x00binary")
    dst = tmp_path / "out" / "nested" / "dst.txt"

    copy_file(src, dst)

    assert dst.read_bytes() == src.read_bytes()


def test_copy_file_does_not_copy_mode(tmp_path: Path) -> None:
    """Test that file permissions are not carried over."""
    src = tmp_path / "script.sh"
    src.write_text("#!/bin/sh\n")
    src.chmod(0o700)
    dst = tmp_path / "copy.sh"

    copy_file(src, dst)

    assert stat.S_IMODE(dst.stat().st_mode) & stat.S_IXUSR == 0


def test_copy_file_overwrites(tmp_path: Path) -> None:
    """Test that an existing destination is replaced."""
    src = tmp_path / "src"
    src.write_text("new")
    dst = tmp_path / "dst"
    dst.write_text("old contents that are longer")

    copy_file(src, dst)

    assert dst.read_text() == "new"


def test_copy_file_missing_source(tmp_path: Path) -> None:
    """Test that a missing source raises OSError."""
    with pytest.raises(OSError):
        copy_file(tmp_path / "missing", tmp_path / "dst")


def test_copy_dir_tree(tmp_path: Path) -> None:
    """Test copying a nested directory tree."""
    src = tmp_path / "nvim"
    (src / "lua" / "plugins").mkdir(parents=True)
    (src / "init.lua").write_text("require('plugins')")
    (src / "lua" / "plugins" / "init.lua").write_text("return {}")
    (src / "empty").mkdir()
    dst = tmp_path / "backup" / "nvim"

    copy_dir(src, dst)

    assert (dst / "init.lua").read_text() == "require('plugins')"
    assert (dst / "lua" / "plugins" / "init.lua").read_text() == "return {}"
    assert (dst / "empty").is_dir()


def test_copy_dir_preserves_directory_mode(tmp_path: Path) -> None:
    """Test that directories keep their permission bits."""
    src = tmp_path / "secret"
    src.mkdir()
    (src / "key").write_text("k")
    src.chmod(0o700)
    dst = tmp_path / "dst"

    copy_dir(src, dst)

    assert stat.S_IMODE(dst.stat().st_mode) == 0o700


def test_copy_dir_gives_missing_ancestors_the_directory_mode(tmp_path: Path) -> None:
    """Test that intermediate directories get the source directory's mode."""
    src = tmp_path / "nvim"
    src.mkdir()
    (src / "init.lua").write_text("-- nvim")
    src.chmod(0o700)
    dotfiles = tmp_path / "dotfiles"
    dotfiles.mkdir(mode=0o755)
    dotfiles.chmod(0o755)
    dst = dotfiles / ".config" / "nvim"

    copy_dir(src, dst)

    assert stat.S_IMODE((dotfiles / ".config").stat().st_mode) == 0o700
    assert stat.S_IMODE(dst.stat().st_mode) == 0o700
    assert stat.S_IMODE(dotfiles.stat().st_mode) == 0o755
    assert (dst / "init.lua").read_text() == "-- nvim"


def test_copy_dir_merges_into_existing(tmp_path: Path) -> None:
    """Test copying over a directory that already has content."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "a").write_text("from source")
    dst = tmp_path / "dst"
    dst.mkdir()
    (dst / "a").write_text("stale")
    (dst / "b").write_text("kept")

    copy_dir(src, dst)

    assert (dst / "a").read_text() == "from source"
    assert (dst / "b").read_text() == "kept"


def test_copy_dir_copies_symlinked_files_as_contents(tmp_path: Path) -> None:
    """Test that a symlink inside the tree is copied as the file it points at."""
    target = tmp_path / "target"
    target.write_text("linked")
    src = tmp_path / "src"
    src.mkdir()
    (src / "link").symlink_to(target)
    dst = tmp_path / "dst"

    copy_dir(src, dst)

    assert not (dst / "link").is_symlink()
    assert (dst / "link").read_text() == "linked"


def test_copy_path_dispatches(tmp_path: Path) -> None:
    """Test copy_path with a file and a directory."""
    file_src = tmp_path / ".vimrc"
    file_src.write_text("syntax on")
    dir_src = tmp_path / ".config"
    dir_src.mkdir()
    (dir_src / "x").write_text("x")

    copy_path(file_src, tmp_path / "out" / ".vimrc")
    copy_path(dir_src, tmp_path / "out" / ".config")

    assert (tmp_path / "out" / ".vimrc").read_text() == "syntax on"
    assert (tmp_path / "out" / ".config" / "x").read_text() == "x"
