"""Test configuration."""

from __future__ import annotations

import io
import json
import subprocess
from pathlib import Path
from typing import List

import pytest
from rich.console import Console


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a fake home directory and point HOME at it."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def repo_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a repository root and make it the working directory."""
    repo = tmp_path / "repo"
    repo.mkdir()
    monkeypatch.chdir(repo)
    return repo


@pytest.fixture
def git_repo(repo_dir: Path, home_dir: Path) -> Path:
    """Initialize a Git repository with a test identity in the repository root."""
    subprocess.run(["git", "init"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(["git", "config", "user.name", "Test User"], cwd=repo_dir, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"], cwd=repo_dir, check=True
    )
    return repo_dir


@pytest.fixture
def output() -> io.StringIO:
    """Buffer that receives console output."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Wide, colorless console writing into ``output``."""
    return Console(file=output, width=200, color_system=None)


def write_config(repo_dir: Path, dotfiles: List[str]) -> Path:
    """Write a config.json tracking ``dotfiles`` into ``repo_dir``."""
    config_path = repo_dir / "config.json"
    config_path.write_text(json.dumps({"dotfiles": dotfiles}))
    return config_path


def git_log(repo_dir: Path) -> str:
    """Return the one-line commit log of ``repo_dir``."""
    result = subprocess.run(
        ["git", "log", "--oneline"], cwd=repo_dir, capture_output=True, text=True
    )
    return result.stdout
