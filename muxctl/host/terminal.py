"""Terminal capability probes.

On Unix every modern terminal is assumed to handle Nerd Fonts and 24-bit
color. On Windows, Windows Terminal (which sets WT_SESSION) does; the legacy
console host may not.
"""

import os
import platform


def _is_windows() -> bool:
    return platform.system() == "Windows"


def is_windows_terminal() -> bool:
    """Return True if running inside Windows Terminal."""
    return _is_windows() and bool(os.environ.get("WT_SESSION"))


def is_conhost() -> bool:
    """Return True if running in the legacy Windows console host."""
    return _is_windows() and not is_windows_terminal()


def supports_nerd_fonts() -> bool:
    """Return True if the terminal likely renders Nerd Font glyphs."""
    if _is_windows():
        return is_windows_terminal()
    return True


def supports_24bit_color() -> bool:
    """Return True if the terminal supports 24-bit (true) color."""
    if _is_windows():
        return is_windows_terminal()
    return True
