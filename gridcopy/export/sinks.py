"""Clipboard and download sinks for exported text.

Both sinks are best-effort: a missing clipboard tool or an unwritable
download directory is reported through the return value and the log, never
raised to the caller.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

logger = logging.getLogger(__name__)

CSV_DOWNLOAD_FILENAME = "tableRows.csv"
CSV_MIME_TYPE = "text/csv"
CSV_HREF_PREFIX = "data:attachment/csv;charset=utf-8,"

# Characters left unescaped by ECMAScript encodeURI besides alphanumerics.
_ENCODE_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


def clipboard_commands(platform: str | None = None, os_name: str | None = None) -> list[list[str]]:
    """Return candidate clipboard commands for the current platform, in preference order."""
    platform = sys.platform if platform is None else platform
    os_name = os.name if os_name is None else os_name
    if platform == "darwin":
        return [["pbcopy"]]
    if os_name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def system_clipboard_available() -> bool:
    """Probe whether any clipboard command is installed."""
    return any(shutil.which(command[0]) is not None for command in clipboard_commands())


def copy_text_to_system_clipboard(text: str) -> bool:
    """Best-effort clipboard copy across macOS, Windows, and common Linux tools."""
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                check=False,
            )
        except OSError:
            logger.debug("clipboard command %s failed to start", command[0], exc_info=True)
            continue
        if proc.returncode == 0:
            return True
        logger.debug("clipboard command %s exited with %s", command[0], proc.returncode)
    return False


class FocusSuppressor(Protocol):
    """Host capability that stops global keyboard handling during a copy."""

    def disable(self) -> None: ...

    def enable(self) -> None: ...


class NullFocusSuppressor:
    def disable(self) -> None:
        pass

    def enable(self) -> None:
        pass


class ClipboardWriter:
    """Write text to a clipboard after probing that one exists."""

    def __init__(
        self,
        copy_text: Callable[[str], bool] = copy_text_to_system_clipboard,
        is_available: Callable[[], bool] = system_clipboard_available,
        focus_suppressor: FocusSuppressor | None = None,
    ) -> None:
        self._copy_text = copy_text
        self._is_available = is_available
        self._focus_suppressor = focus_suppressor or NullFocusSuppressor()

    def is_available(self) -> bool:
        try:
            return bool(self._is_available())
        except Exception:
            logger.debug("clipboard capability probe failed", exc_info=True)
            return False

    def write(self, text: str) -> bool:
        """Copy ``text`` with focus handling suppressed, retrying once without it.

        Returns ``False`` without writing when no clipboard is available, or
        when the retry fails as well.
        """
        if not self.is_available():
            logger.debug("clipboard unavailable; skipping copy")
            return False

        try:
            self._focus_suppressor.disable()
            try:
                return self._copy_text(text)
            finally:
                self._focus_suppressor.enable()
        except Exception:
            logger.warning("clipboard write under focus suppression failed; retrying", exc_info=True)
        try:
            return self._copy_text(text)
        except Exception:
            logger.warning("clipboard write failed", exc_info=True)
            return False


@dataclass(frozen=True)
class DownloadPayload:
    """A text file offered for download."""

    href: str
    filename: str
    mime_type: str
    text: str


def encode_uri(text: str) -> str:
    """Percent-encode ``text`` the way ECMAScript ``encodeURI`` does."""
    return quote(text, safe=_ENCODE_URI_SAFE)


def build_csv_download(text: str, filename: str = CSV_DOWNLOAD_FILENAME) -> DownloadPayload:
    return DownloadPayload(
        href=CSV_HREF_PREFIX + encode_uri(text),
        filename=filename,
        mime_type=CSV_MIME_TYPE,
        text=text,
    )


def save_payload_to_directory(directory: Path) -> Callable[[DownloadPayload], None]:
    """Return a download trigger that writes payloads into ``directory``.

    Text is written verbatim (``newline=""``) so exported line endings survive.
    """

    def _trigger(payload: DownloadPayload) -> None:
        target = directory / Path(payload.filename).name
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with target.open("w", encoding="utf-8", newline="") as handle:
                handle.write(payload.text)
        except OSError:
            logger.error("failed to save download %s", target, exc_info=True)
            return
        logger.info("saved %s", target)

    return _trigger
