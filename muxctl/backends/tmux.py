"""tmux terminal multiplexer backend.

This module provides tmux integration using the tmux CLI. It implements the
MultiplexerBackend interface defined in base.py, mapping every operation onto
exactly one tmux invocation.
"""

import logging
import shutil
import subprocess
from collections.abc import Mapping

from muxctl.backends.base import MultiplexerBackend
from muxctl.errors import ExternalProcessError
from muxctl.escape import encode_sgr_mouse
from muxctl.parsing import (
    NOT_FOUND,
    PANE_SIZE_FORMAT,
    SESSION_NAME_FORMAT,
    PaneSize,
    parse_pane_size,
    parse_session_names,
)
from muxctl.services.operation_logging_service import OperationLoggingService

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def _exact_session(name: str) -> str:
    """Target matching the session name exactly; a bare name also matches by prefix."""
    return f"={name}"


def _run_mux(
    executable: str,
    *args: str,
    input_text: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> tuple[int, str, str]:
    """Run a multiplexer command.

    Args:
        executable: Program to run (e.g. "tmux").
        *args: Command arguments to pass to the program.
        input_text: Text piped to the process's stdin, if any.
        timeout: Command timeout in seconds.

    Returns:
        Tuple of (return_code, stdout, stderr).
    """
    cmd = [executable, *args]
    try:
        result = subprocess.run(
            cmd,
            input=input_text,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return (result.returncode, result.stdout or "", result.stderr or "")
    except subprocess.TimeoutExpired:
        return (1, "", "Command timed out")
    except FileNotFoundError:
        return (1, "", f"{executable} not found")


class TmuxBackend(MultiplexerBackend):
    """tmux-based multiplexer backend.

    Subclasses for tmux-compatible programs only need to override
    ``executable``.
    """

    executable = "tmux"

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        log_service: OperationLoggingService | None = None,
    ):
        """Initialize the backend.

        Args:
            timeout: Seconds to wait for each invocation.
            log_service: Optional operation log receiving one entry per invocation.
        """
        self.timeout = timeout
        self.log_service = log_service

    @property
    def backend_name(self) -> str:
        """Return the backend identifier."""
        return self.executable

    def is_available(self) -> bool:
        """Check if the executable is on PATH."""
        return shutil.which(self.executable) is not None

    def _invoke(
        self,
        operation: str,
        target: str | None,
        *args: str,
        input_text: str | None = None,
        direction: str = "out",
        payload: str | None = None,
    ) -> tuple[int, str, str]:
        """Run one multiplexer command and record it in the operation log."""
        logger.debug(f"{self.executable} {' '.join(args)}")
        returncode, stdout, stderr = _run_mux(
            self.executable, *args, input_text=input_text, timeout=self.timeout
        )
        if self.log_service is not None:
            self.log_service.record(
                backend=self.backend_name,
                operation=operation,
                target=target,
                direction=direction,
                payload=stdout if direction == "in" else payload,
                success=returncode == 0,
                returncode=returncode,
            )
        return returncode, stdout, stderr

    def _check(self, args: tuple[str, ...], result: tuple[int, str, str]) -> str:
        """Return stdout, or raise ExternalProcessError on non-zero exit."""
        returncode, stdout, stderr = result
        if returncode != 0:
            logger.warning(f"{self.executable} {args[0]} failed ({returncode}): {stderr.strip()}")
            raise ExternalProcessError([self.executable, *args], returncode, stderr)
        return stdout

    def _run_checked(self, operation: str, target: str | None, *args: str, **kwargs) -> str:
        return self._check(args, self._invoke(operation, target, *args, **kwargs))

    def create_session(
        self,
        name: str,
        start_dir: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Create a new detached tmux session.

        Environment entries are passed as -e flags in sorted key order.
        """
        args = ["new-session", "-d", "-s", name]
        if start_dir:
            args.extend(["-c", start_dir])
        for key in sorted(env or {}):
            args.extend(["-e", f"{key}={env[key]}"])
        self._run_checked("create_session", name, *args)

    def kill_session(self, name: str) -> None:
        """Kill a tmux session."""
        self._run_checked("kill_session", name, "kill-session", "-t", _exact_session(name))

    def has_session(self, name: str) -> bool:
        """Check if a tmux session with the given name exists."""
        returncode, _, _ = self._invoke(
            "has_session", name, "has-session", "-t", _exact_session(name)
        )
        return returncode == 0

    def list_sessions(self, prefix: str = "") -> list[str]:
        """List tmux session names starting with prefix."""
        stdout = self._run_checked(
            "list_sessions", None, "list-sessions", "-F", SESSION_NAME_FORMAT, direction="in"
        )
        return parse_session_names(stdout, prefix)

    def send_keys(self, target: str, *keys: str) -> None:
        """Send named keys to a pane."""
        self._run_checked(
            "send_keys", target, "send-keys", "-t", target, "--", *keys, payload=" ".join(keys)
        )

    def send_literal(self, target: str, text: str) -> None:
        """Send text to a pane with -l so key names are not looked up.

        "--" ends option parsing, so text starting with "-" is not read as a flag.
        """
        self._run_checked(
            "send_literal", target, "send-keys", "-t", target, "-l", "--", text, payload=text
        )

    def send_mouse_event(
        self,
        target: str,
        button: int,
        column: int,
        row: int,
        release: bool = False,
    ) -> None:
        """Send an SGR mouse sequence as literal input."""
        self.send_literal(target, encode_sgr_mouse(button, column, row, release))

    def resize_pane(self, target: str, width: int, height: int) -> None:
        """Resize a pane to explicit dimensions."""
        self._run_checked(
            "resize_pane", target, "resize-pane", "-t", target, "-x", str(width), "-y", str(height)
        )

    def set_manual_sizing(self, session: str) -> None:
        """Set window-size to manual so resize-pane is honoured without a client."""
        self._run_checked(
            "set_manual_sizing",
            session,
            "set-option",
            "-t",
            _exact_session(session),
            "window-size",
            "manual",
        )

    def query_pane_size(self, target: str) -> PaneSize:
        """Query pane width and height via display-message."""
        returncode, stdout, _ = self._invoke(
            "query_pane_size",
            target,
            "display-message",
            "-t",
            target,
            "-p",
            PANE_SIZE_FORMAT,
            direction="in",
        )
        if returncode != 0:
            return NOT_FOUND
        return parse_pane_size(stdout)

    def capture_pane_output(self, target: str, scrollback: int = 0) -> str:
        """Capture pane content including escape sequences (-e)."""
        args = ["capture-pane", "-t", target, "-p", "-e"]
        if scrollback > 0:
            args.extend(["-S", f"-{scrollback}"])
        return self._run_checked("capture_pane_output", target, *args, direction="in")

    def load_clipboard_buffer(self, text: str) -> None:
        """Load text into the paste buffer via stdin."""
        self._run_checked(
            "load_clipboard_buffer", None, "load-buffer", "-", input_text=text, payload=text
        )

    def paste_clipboard_buffer(self, target: str) -> None:
        """Paste and delete the buffer; -p uses bracketed paste when the pane requested it."""
        self._run_checked(
            "paste_clipboard_buffer", target, "paste-buffer", "-t", target, "-d", "-p"
        )
