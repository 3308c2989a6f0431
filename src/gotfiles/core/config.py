"""Configuration management for gotfiles."""

from __future__ import annotations

import json
from pathlib import Path, PurePath
from typing import Any, Dict, List, Optional, Tuple

import yaml

CONFIG_FILE = "config.json"
YAML_SUFFIXES = (".yaml", ".yml")


class Config:
    """List of dotfiles tracked relative to the home directory.

    The list is loaded once per run and exposed as a tuple, so the order
    from the config file is the processing order.

    Attributes:
        path (Optional[Path]): File the configuration was read from, if any.
        dotfiles (Tuple[str, ...]): Tracked paths, relative to the home directory.
    """

    def __init__(self, dotfiles: Optional[List[str]] = None) -> None:
        """Initialize configuration."""
        self.path: Optional[Path] = None
        self._dotfiles: Tuple[str, ...] = ()
        self.load_from_dict({"dotfiles": list(dotfiles or [])})

    @property
    def dotfiles(self) -> Tuple[str, ...]:
        """Tracked paths in config order."""
        return self._dotfiles

    def __len__(self) -> int:
        return len(self._dotfiles)

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """Load configuration from a JSON or YAML file.

        Args:
            config_file: Path to the configuration file. Files ending in
                ``.yaml`` or ``.yml`` are parsed as YAML, anything else as JSON.

        Returns:
            The loaded configuration.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not valid JSON/YAML or fails validation.
        """
        config_file = Path(config_file)
        with open(config_file, "r", encoding="utf-8") as f:
            text = f.read()

        try:
            if config_file.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Invalid configuration syntax: {e}") from e

        config = cls()
        config.load_from_dict(data)
        config.path = config_file
        return config

    def load_from_dict(self, config_data: Any) -> None:
        """Load configuration from a dictionary.

        Args:
            config_data: Parsed configuration document, e.g.
                ``{"dotfiles": [".vimrc", ".config/nvim"]}``.

        Raises:
            ValueError: If the document fails validation.
        """
        if not isinstance(config_data, dict):
            raise ValueError("Configuration must be a dictionary")

        errors = self.validate(config_data)
        if errors:
            raise ValueError("; ".join(errors))

        self._dotfiles = tuple(config_data.get("dotfiles") or [])

    @staticmethod
    def validate(config_data: Dict[str, Any]) -> List[str]:
        """Validate a configuration document and return the list of problems."""
        errors = []
        dotfiles = config_data.get("dotfiles")
        if dotfiles is None:
            return errors

        if not isinstance(dotfiles, list):
            errors.append("dotfiles must be a list")
            return errors

        for item in dotfiles:
            if not isinstance(item, str) or not item.strip():
                errors.append(f"dotfile entry {item!r} must be a non-empty string")
                continue
            path = PurePath(item)
            if path.is_absolute():
                errors.append(f"dotfile entry {item!r} must be relative to the home directory")
            elif not path.parts:
                errors.append(f"dotfile entry {item!r} must name a path below the home directory")
            elif ".." in path.parts:
                errors.append(f"dotfile entry {item!r} must not contain '..'")

        return errors
