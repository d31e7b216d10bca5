#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Global configuration and constants for the Media Browser.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml

logger = logging.getLogger(__name__)

# File type categories (lower-case, without the dot)
MOVIE_EXTENSIONS: Set[str] = {
    "3g2", "3gp", "asf", "avi", "divx", "flv", "m2v", "m4v", "mkv", "mov",
    "mp2", "mp4", "mpe", "mpeg", "mpg", "nsv", "ogm", "qt", "rm", "rmvb",
    "vob", "wmv",
}
IMAGE_EXTENSIONS: Set[str] = {"bmp", "jpg", "jpeg", "png"}
ARCHIVE_EXTENSIONS: Set[str] = {"zip", "cbz"}
SUPPORTED_EXTENSIONS: Set[str] = MOVIE_EXTENSIONS | ARCHIVE_EXTENSIONS

# Application directories
APP_DIR = Path.home() / ".config" / "media-browser"
YAML_CONFIG_FILE = APP_DIR / "config.yml"
JSON_CONFIG_FILE = APP_DIR / "config.json"
DEFAULT_THUMBNAIL_DIR = Path.home() / ".local" / "share" / "media-browser" / "thumbnails"
DEFAULT_DATABASE = APP_DIR / "media_browser.db"

# Thumbnail defaults
DEFAULT_THUMBNAIL_COUNT = 5
DEFAULT_THUMBNAIL_SIZE = 240

# External tools
THUMBNAILER = "ffmpegthumbnailer"
PROBE = "ffprobe"
DEFAULT_COMMAND = "xdg-open"
MAIN_COMMAND_NAME = "default"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is malformed."""


@dataclass(frozen=True)
class LibraryConfig:
    """Read-only settings consumed by the library and the thumbnail pipeline."""
    thumbnail_dir: Path = DEFAULT_THUMBNAIL_DIR
    thumbnail_count: int = DEFAULT_THUMBNAIL_COUNT
    thumbnail_size: int = DEFAULT_THUMBNAIL_SIZE
    database: Path = DEFAULT_DATABASE
    default_command: str = DEFAULT_COMMAND
    # extension -> {command name -> shell-style template}
    commands: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def get_command(self, extname: str) -> Optional[str]:
        """Return the main command template for an extension."""
        named = self.get_all_commands(extname)
        return named.get(MAIN_COMMAND_NAME, self.default_command or None)

    def get_all_commands(self, extname: str) -> Dict[str, str]:
        """Return every named command template configured for an extension."""
        return dict(self.commands.get(extname.lower(), {}))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LibraryConfig":
        """Create a config from a parsed YAML/JSON mapping.

        Accepts either flat keys or a nested ``thumbnail`` section
        (``thumbnail: {dir, count, size}``).
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping, got {type(data).__name__}")

        thumb = data.get("thumbnail") or {}
        if not isinstance(thumb, dict):
            raise ConfigError("'thumbnail' section must be a mapping")

        kwargs: Dict[str, Any] = {}
        thumb_dir = thumb.get("dir", data.get("thumbnail_dir"))
        if thumb_dir:
            kwargs["thumbnail_dir"] = Path(thumb_dir).expanduser()
        database = data.get("database")
        if database:
            kwargs["database"] = Path(database).expanduser()

        try:
            count = thumb.get("count", data.get("thumbnail_count"))
            if count is not None:
                kwargs["thumbnail_count"] = int(count)
            size = thumb.get("size", data.get("thumbnail_size"))
            if size is not None:
                kwargs["thumbnail_size"] = int(size)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid thumbnail setting: {e}") from e

        if kwargs.get("thumbnail_count", 1) < 1:
            raise ConfigError("thumbnail count must be at least 1")
        if kwargs.get("thumbnail_size", 1) < 1:
            raise ConfigError("thumbnail size must be at least 1")

        if "default_command" in data:
            kwargs["default_command"] = data["default_command"] or ""

        commands = data.get("commands") or {}
        if not isinstance(commands, dict):
            raise ConfigError("'commands' section must be a mapping")
        parsed: Dict[str, Dict[str, str]] = {}
        for ext, entry in commands.items():
            # A bare string is shorthand for the main command
            if isinstance(entry, str):
                entry = {MAIN_COMMAND_NAME: entry}
            if not isinstance(entry, dict):
                raise ConfigError(f"Commands for '{ext}' must be a string or a mapping")
            parsed[str(ext).lower().lstrip(".")] = {str(k): str(v) for k, v in entry.items()}
        kwargs["commands"] = parsed

        return cls(**kwargs)


def config_file() -> Optional[Path]:
    """Return the config file in the app dir, preferring YAML over JSON."""
    for candidate in (YAML_CONFIG_FILE, JSON_CONFIG_FILE):
        if candidate.exists():
            return candidate
    return None


def load_config(path: Optional[Path] = None) -> LibraryConfig:
    """Load configuration from ``path`` or the app dir; defaults when absent."""
    path = Path(path) if path else config_file()
    if path is None:
        logger.debug("No configuration file found, using defaults.")
        return LibraryConfig()

    logger.debug("Loading configuration from %s", path)
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse configuration file {path}: {e}") from e

    return LibraryConfig.from_dict(data or {})
