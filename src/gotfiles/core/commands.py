"""Command functionality for gotfiles."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .config import Config
from .link import LinkManager, SourceState
from .repository import GitRepository

logger = logging.getLogger(__name__)

DOTFILES_DIR = "dotfiles"
INIT_COMMIT_MESSAGE = "Update dotfiles backup"
SYNC_COMMIT_MESSAGE = "Sync dotfiles changes"


def resolve_home() -> Path:
    """Return the user's home directory.

    Raises:
        RuntimeError: If the home directory cannot be determined.
    """
    try:
        return Path.home()
    except (KeyError, RuntimeError) as e:
        raise RuntimeError(f"Could not determine home directory: {e}") from e


def init(
    config: Config,
    repo_dir: Path,
    home_dir: Path,
    dry_run: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Back up every configured item into ``<repo_dir>/dotfiles`` and push.

    The ``dotfiles`` directory is created if it does not exist yet.
    """
    dotfiles_dir = repo_dir / DOTFILES_DIR
    if not dry_run:
        dotfiles_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    _run(config, repo_dir, home_dir, False, INIT_COMMIT_MESSAGE, dry_run, console)


def sync(
    config: Config,
    repo_dir: Path,
    home_dir: Path,
    dry_run: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Re-run the backup against an existing ``<repo_dir>/dotfiles`` and push.

    Raises:
        FileNotFoundError: If ``init`` has not created the dotfiles directory.
    """
    dotfiles_dir = repo_dir / DOTFILES_DIR
    if not dotfiles_dir.is_dir():
        raise FileNotFoundError(
            "dotfiles repository directory does not exist. Run 'gotfiles init' first"
        )
    _run(config, repo_dir, home_dir, True, SYNC_COMMIT_MESSAGE, dry_run, console)


def _run(
    config: Config,
    repo_dir: Path,
    home_dir: Path,
    is_sync: bool,
    message: str,
    dry_run: bool,
    console: Optional[Console],
) -> None:
    console = console or Console()
    manager = LinkManager(home_dir, repo_dir / DOTFILES_DIR, console)
    for item in config.dotfiles:
        manager.reconcile(item, is_sync=is_sync, dry_run=dry_run)

    if dry_run:
        console.print("[blue]Dry run: skipping git add, commit and push.")
        return
    GitRepository(repo_dir).publish(message)


def status(
    config: Config,
    repo_dir: Path,
    home_dir: Path,
    console: Optional[Console] = None,
) -> None:
    """Print a table of tracked items with their home and repository state."""
    console = console or Console()
    if not config.dotfiles:
        console.print("[yellow]No dotfiles configured.")
        return

    manager = LinkManager(home_dir, repo_dir / DOTFILES_DIR, console)
    table = Table(title="Tracked Dotfiles")
    table.add_column("Item", style="cyan")
    table.add_column("Home", style="green")
    table.add_column("Backed Up", style="magenta")

    for item in config.dotfiles:
        state, backed_up = manager.inspect(item)
        home_state = state.value
        if state is SourceState.SYMLINK:
            target = _readlink(manager.source_path(item))
            if target is not None and target != manager.dest_path(item).absolute():
                home_state = "symlink (elsewhere)"
        table.add_row(item, home_state, "yes" if backed_up else "no")

    console.print(table)


def _readlink(path: Path) -> Optional[Path]:
    try:
        return path.parent / os.readlink(path)
    except OSError as e:
        logger.debug("Could not read link %s: %s", path, e)
        return None
