"""Install-method detection.

Works out how muxctl was installed so update hints can name the right
command. The probe may shell out to Homebrew, so it runs at most once per
process; the result is never invalidated mid-process.
"""

import logging
import os
import platform
import shutil
import subprocess
import sys
import threading
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

HOMEBREW_FORMULA = "muxctl"


class InstallMethod(str, Enum):
    """How the running copy of muxctl was installed."""

    HOMEBREW = "homebrew"
    SCOOP = "scoop"
    PIPX = "pipx"
    BINARY = "binary"
    PIP = "pip"


_detected_method: InstallMethod | None = None
_detect_lock = threading.Lock()


def detect_install_method() -> InstallMethod:
    """Return the install method, probing the environment on first call only."""
    global _detected_method
    with _detect_lock:
        if _detected_method is None:
            _detected_method = _detect_install_method()
            logger.debug(f"Detected install method: {_detected_method.value}")
        return _detected_method


def reset_install_method() -> None:
    """Forget the cached result (for testing)."""
    global _detected_method
    with _detect_lock:
        _detected_method = None


def _detect_install_method() -> InstallMethod:
    # Homebrew first, then Scoop, pipx, frozen binaries; plain pip otherwise
    if _is_homebrew_install():
        return InstallMethod.HOMEBREW
    if _is_scoop_install():
        return InstallMethod.SCOOP
    if _is_pipx_install():
        return InstallMethod.PIPX
    if getattr(sys, "frozen", False):
        return InstallMethod.BINARY
    return InstallMethod.PIP


def _is_homebrew_install() -> bool:
    """Check whether the Homebrew formula is installed (macOS/Linux only)."""
    if platform.system() not in ("Darwin", "Linux"):
        return False
    if shutil.which("brew") is None:
        return False
    try:
        result = subprocess.run(
            ["brew", "list", "--formula", HOMEBREW_FORMULA],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return result.returncode == 0 and bool(result.stdout.strip())


def _executable_path() -> str:
    """Resolved path of the running program, lowercased with forward slashes."""
    exe = sys.executable if getattr(sys, "frozen", False) else sys.argv[0] or sys.executable
    try:
        resolved = Path(exe).resolve()
    except OSError:
        resolved = Path(exe)
    return resolved.as_posix().lower()


def _is_scoop_install() -> bool:
    """Scoop installs under ~/scoop/apps/<app>/current/ with shims in ~/scoop/shims/."""
    if platform.system() != "Windows":
        return False
    path = _executable_path()
    return "/scoop/shims/" in path or "/scoop/apps/" in path


def _is_pipx_install() -> bool:
    """pipx gives every application its own venv under .../pipx/venvs/<app>."""
    prefix = Path(sys.prefix).as_posix().lower()
    if "/pipx/venvs/" in prefix:
        return True
    pipx_home = os.environ.get("PIPX_HOME")
    return bool(pipx_home) and prefix.startswith(Path(pipx_home).as_posix().lower())
