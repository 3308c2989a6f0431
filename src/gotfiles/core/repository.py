"""Git repository driver for gotfiles."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitRepository:
    """The Git working tree that holds the ``dotfiles`` backup directory.

    Git is run as a subprocess in the repository root. Its output is not
    captured; it goes straight to the terminal like an interactive git call.

    Attributes:
        path (Path): Root of the repository (the directory ``git`` runs in).
    """

    def __init__(self, path: Path):
        """Initialize repository."""
        self.path = Path(path).resolve()
        self.name = self.path.name

    def __str__(self) -> str:
        """Return string representation."""
        return f"GitRepository({self.path})"

    def __repr__(self) -> str:
        """Return string representation."""
        return self.__str__()

    def _run_git(self, *args: str) -> None:
        """Run a Git command, blocking until it exits.

        Raises:
            RuntimeError: If git exits non-zero or cannot be started.
        """
        logger.debug("Running git %s in %s (%s)", " ".join(args), self.name, self.path)
        try:
            subprocess.run(["git", *args], cwd=self.path, check=True)
        except subprocess.CalledProcessError as e:
            raise RuntimeError(f"Git command failed with exit status {e.returncode}") from e
        except OSError as e:
            raise RuntimeError(f"Could not run git: {e}") from e

    def add(self, path: str = ".") -> None:
        """Stage ``path`` (relative to the repository root).

        Raises:
            RuntimeError: If Git add operation fails.
        """
        self._run_git("add", path)

    def commit(self, message: str) -> None:
        """Commit staged changes.

        Raises:
            RuntimeError: If Git commit fails, including when there is
                        nothing to commit.
        """
        self._run_git("commit", "-m", message)

    def push(self) -> None:
        """Push the current branch to its upstream.

        Raises:
            RuntimeError: If Git push fails.
        """
        self._run_git("push")

    def publish(self, message: str) -> bool:
        """Stage everything, commit with ``message`` and push.

        The three steps always run in order. A failing step is logged and the
        next one is still attempted.

        Args:
            message (str): Commit message.

        Returns:
            bool: True if every step succeeded.

        Example:
            ```python
            repo = GitRepository(Path.cwd())
            repo.publish("Sync dotfiles changes")
            ```
        """
        ok = True
        steps = (
            ("add", lambda: self.add(".")),
            ("commit", lambda: self.commit(message)),
            ("push", self.push),
        )
        for name, step in steps:
            try:
                step()
            except RuntimeError as e:
                logger.error("Error running git %s: %s", name, e)
                ok = False
        return ok
