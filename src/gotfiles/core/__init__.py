"""Core functionality for gotfiles."""

from .config import Config
from .link import LinkManager, SourceState
from .repository import GitRepository

__all__ = ["Config", "GitRepository", "LinkManager", "SourceState"]
