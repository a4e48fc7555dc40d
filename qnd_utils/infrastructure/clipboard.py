"""Clipboard Access: copy text to the system clipboard through a Clipboard protocol.

Invariants:
    - copy_to_clipboard never raises for a missing or failing clipboard: it logs a
      warning and returns False
    - SystemClipboard shells out to the platform's copy command; no command found
      raises ClipboardUnavailable, which copy_to_clipboard turns into False
"""

import logging
import shutil
import subprocess
import sys

from qnd_utils.core.boundary_protocols import Clipboard

logger = logging.getLogger(__name__)

# Linux candidates in order of preference
_LINUX_COMMANDS = (
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


class ClipboardUnavailable(RuntimeError):
    """No clipboard command exists on this system."""


class SystemClipboard:
    """Pipes text into pbcopy, clip, wl-copy, xclip or xsel."""

    def __init__(self, timeout_seconds: float = 5.0):
        self.timeout_seconds = timeout_seconds

    def copy(self, text: str) -> None:
        command = self._find_command()
        subprocess.run(
            list(command),
            input=text.encode("utf-8"),
            check=True,
            timeout=self.timeout_seconds,
        )

    @staticmethod
    def _find_command() -> tuple[str, ...]:
        if sys.platform == "darwin":
            candidates = (("pbcopy",),)
        elif sys.platform.startswith("win"):
            candidates = (("clip",),)
        else:
            candidates = _LINUX_COMMANDS
        for command in candidates:
            if shutil.which(command[0]):
                return command
        raise ClipboardUnavailable(
            f"No clipboard command found (tried {', '.join(c[0] for c in candidates)})",
        )


class InMemoryClipboard:
    """Keeps the copied text in memory; history holds every copy in order."""

    def __init__(self):
        self.history: list[str] = []

    def copy(self, text: str) -> None:
        self.history.append(text)

    @property
    def content(self) -> str | None:
        return self.history[-1] if self.history else None


def copy_to_clipboard(text: str, clipboard: Clipboard | None = None) -> bool:
    """Replace the clipboard content with text. Returns True on success."""
    clipboard = clipboard or SystemClipboard()
    try:
        clipboard.copy(text)
    except (ClipboardUnavailable, subprocess.SubprocessError, OSError) as e:
        logger.warning(f"Copy to clipboard failed: {e}")
        return False
    return True
