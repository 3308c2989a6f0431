"""Migration of dotfiles into the repository and symlinking them back.

For every tracked item the home-side path is examined and moved into the
repository (copy, then delete the original). Once the home-side path is gone
and the repository holds a copy, a symlink pointing at the copy takes its
place. Items that are already symlinks are left alone, so running the same
item list again is a no-op.
"""

from __future__ import annotations

import logging
import shutil
import stat
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console

from .files import copy_path

logger = logging.getLogger(__name__)


class SourceState(Enum):
    """State of a tracked item's path in the home directory."""

    SYMLINK = "symlink"
    DIRECTORY = "directory"
    FILE = "file"
    MISSING = "missing"
    INACCESSIBLE = "inaccessible"


class LinkManager:
    """Moves tracked items into the repository and links them back.

    Attributes:
        home_dir (Path): Directory the tracked item paths are relative to.
        dotfiles_dir (Path): Repository directory holding the backed up copies.
        console (Console): Rich console for progress output.
    """

    def __init__(self, home_dir: Path, dotfiles_dir: Path, console: Optional[Console] = None):
        """Initialize the link manager."""
        self.home_dir = Path(home_dir)
        self.dotfiles_dir = Path(dotfiles_dir)
        self.console = console or Console()

    def source_path(self, item: str) -> Path:
        """Path of ``item`` in the home directory."""
        return self.home_dir / item

    def dest_path(self, item: str) -> Path:
        """Path of ``item`` in the repository."""
        return self.dotfiles_dir / item

    def classify(self, path: Path) -> Tuple[SourceState, Optional[OSError]]:
        """Classify ``path`` without following a final symlink.

        Returns:
            The state, and the error when the path could not be examined.
        """
        try:
            mode = path.lstat().st_mode
        except FileNotFoundError as e:
            return SourceState.MISSING, e
        except OSError as e:
            return SourceState.INACCESSIBLE, e

        if stat.S_ISLNK(mode):
            return SourceState.SYMLINK, None
        if stat.S_ISDIR(mode):
            return SourceState.DIRECTORY, None
        return SourceState.FILE, None

    def inspect(self, item: str) -> Tuple[SourceState, bool]:
        """Report the home-side state of ``item`` and whether it is backed up."""
        state, _ = self.classify(self.source_path(item))
        return state, self.dest_path(item).exists()

    def reconcile(self, item: str, is_sync: bool = False, dry_run: bool = False) -> None:
        """Back up ``item`` into the repository and replace it with a symlink.

        Errors are logged and never raised; the item is left in whatever
        state the failing step produced. The original is only deleted once
        its copy succeeded, so a failed copy leaves it in place and unlinked.

        Args:
            item (str): Path relative to the home directory.
            is_sync (bool): Only changes the wording of the progress messages.
            dry_run (bool): Report what would happen without changing anything.
        """
        source = self.source_path(item)
        dest = self.dest_path(item)
        state, error = self.classify(source)

        if state is SourceState.SYMLINK:
            self.console.print(f"Skipping backup for {item} as it is already a symlink.")
            return

        if state is SourceState.DIRECTORY:
            self._migrate(item, source, dest, "directory", is_sync, dry_run)
        elif state is SourceState.FILE:
            self._migrate(item, source, dest, "file", is_sync, dry_run)
        elif state is SourceState.INACCESSIBLE:
            logger.error("Error accessing %s: %s", item, error)
        else:
            logger.warning("%s does not exist in home.", item)

        if dry_run:
            self._report_link(item, state, dest)
            return
        self._link(item, source, dest)

    def _migrate(
        self, item: str, source: Path, dest: Path, kind: str, is_sync: bool, dry_run: bool
    ) -> None:
        """Copy ``source`` into the repository and remove the original."""
        if dry_run:
            self.console.print(
                f"[blue]Would copy {kind} {item} to repository and remove it from home."
            )
            return

        try:
            copy_path(source, dest)
        except OSError as e:
            logger.error("Error copying %s %s: %s", kind, item, e)
            return

        if is_sync:
            self.console.print(f"[green]Updated {kind} {item} in repository.")
        else:
            self.console.print(f"[green]Copied {kind} {item} to repository.")

        try:
            if kind == "directory":
                shutil.rmtree(source)
            else:
                source.unlink()
        except OSError as e:
            logger.error("Error removing original %s %s: %s", kind, item, e)

    def _link(self, item: str, source: Path, dest: Path) -> None:
        """Symlink ``source`` to ``dest`` if the source is gone and a backup exists."""
        state, error = self.classify(source)
        if state is not SourceState.MISSING:
            if state is SourceState.INACCESSIBLE:
                logger.debug("Not linking %s: %s", item, error)
            return

        try:
            if not dest.exists():
                logger.warning("No backup for %s found in repository.", item)
                return
            source.parent.mkdir(parents=True, exist_ok=True)
            source.symlink_to(dest.absolute(), target_is_directory=dest.is_dir())
        except OSError as e:
            logger.error("Error creating symlink for %s: %s", item, e)
            return

        self.console.print(f"[green]Created symlink for {item}.")

    def _report_link(self, item: str, state: SourceState, dest: Path) -> None:
        """Describe the symlink step of a dry run."""
        if state is SourceState.INACCESSIBLE:
            return
        if state is SourceState.MISSING and not dest.exists():
            logger.warning("No backup for %s found in repository.", item)
            return
        self.console.print(f"[blue]Would create symlink for {item}.")
