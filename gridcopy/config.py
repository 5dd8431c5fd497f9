"""Persistent JSON config helpers.

Stores the export line-ending preference and download defaults.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir, user_downloads_dir

from .export.exporter import LineEnding
from .export.sinks import CSV_DOWNLOAD_FILENAME

logger = logging.getLogger(__name__)

APP_NAME = "gridcopy"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError):
        logger.warning("ignoring unreadable config at %s", CONFIG_PATH, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        logger.warning("could not write config to %s", CONFIG_PATH, exc_info=True)


def load_line_ending() -> LineEnding:
    """Return the persisted line-ending setting, ``auto`` when unset/invalid."""
    value = load_config().get("line_ending")
    if not isinstance(value, str):
        return LineEnding.AUTO
    try:
        return LineEnding(value.strip().lower())
    except ValueError:
        return LineEnding.AUTO


def save_line_ending(line_ending: LineEnding | str) -> None:
    config = load_config()
    config["line_ending"] = LineEnding(line_ending).value
    save_config(config)


def load_download_filename() -> str:
    """Load the suggested download filename; only bare, non-empty names are accepted."""
    value = load_config().get("download_filename")
    if not isinstance(value, str):
        return CSV_DOWNLOAD_FILENAME
    stripped = value.strip()
    if not stripped or Path(stripped).name != stripped:
        return CSV_DOWNLOAD_FILENAME
    return stripped


def save_download_filename(filename: str) -> None:
    stripped = str(filename).strip()
    if not stripped:
        return
    config = load_config()
    config["download_filename"] = stripped
    save_config(config)


def load_download_directory() -> Path:
    """Load the download directory, defaulting to the user's downloads folder."""
    value = load_config().get("download_directory")
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    return Path(user_downloads_dir())


def save_download_directory(directory: Path) -> None:
    config = load_config()
    config["download_directory"] = str(directory)
    save_config(config)
