"""Clipboard access through xclip (X11)."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)


def set_clipboard(text: str, selection: str = "clipboard", timeout: float = 1.0) -> bool:
    """Write *text* to the clipboard. Returns False if xclip is missing or fails."""
    try:
        result = subprocess.run(
            ["xclip", "-i", "-selection", selection],
            input=text, text=True, timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("Clipboard write failed: %s", exc)
        return False
    if result.returncode != 0:
        logger.warning("xclip exited with status %d", result.returncode)
        return False
    return True

