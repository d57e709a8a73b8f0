"""Abstract base class for terminal multiplexer backends.

This module defines the interface that every multiplexer backend must
implement. Callers are written against MultiplexerBackend and never against a
concrete backend, so the same code drives tmux on Unix and psmux on Windows.

The multiplexer is the source of truth: backends hold no session state and
every query is a fresh round trip to the external program.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from muxctl.errors import UnavailableBackend
from muxctl.parsing import PaneSize


class MultiplexerBackend(ABC):
    """Abstract interface for terminal multiplexer backends.

    The interface covers:

    - Session lifecycle (create, kill, existence check, listing)
    - Input injection (named keys, literal text, SGR mouse events)
    - Pane geometry and capture
    - Clipboard buffer exchange

    Targets are opaque strings ("session" or "session:window.pane") passed
    through to the multiplexer unchanged.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the lowercase program name (e.g. 'tmux', 'psmux')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the multiplexer resolves on the executable search path.

        Never starts the program and is safe to call repeatedly.
        """

    def require_available(self) -> None:
        """Raise UnavailableBackend if the program is not on the search path."""
        if not self.is_available():
            raise UnavailableBackend(f"{self.backend_name} not found on PATH")

    @abstractmethod
    def create_session(
        self,
        name: str,
        start_dir: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Create a new detached session.

        Args:
            name: Session name, unique among live sessions.
            start_dir: Working directory. Empty or None uses the program default.
            env: Environment variables scoped to the new session.

        Raises:
            ExternalProcessError: If the session could not be started.
        """

    @abstractmethod
    def kill_session(self, name: str) -> None:
        """Terminate a session.

        Raises:
            ExternalProcessError: If the session does not exist or the kill failed.
        """

    @abstractmethod
    def has_session(self, name: str) -> bool:
        """Return True if the session exists. Any failure reads as absent."""

    @abstractmethod
    def list_sessions(self, prefix: str = "") -> list[str]:
        """List session names starting with prefix, in the program's order.

        Raises:
            ExternalProcessError: If the listing command itself fails.
        """

    @abstractmethod
    def send_keys(self, target: str, *keys: str) -> None:
        """Send named key tokens (e.g. "Enter", "C-c") in a single invocation."""

    @abstractmethod
    def send_literal(self, target: str, text: str) -> None:
        """Send text verbatim with no key-name interpretation."""

    @abstractmethod
    def send_mouse_event(
        self,
        target: str,
        button: int,
        column: int,
        row: int,
        release: bool = False,
    ) -> None:
        """Inject an SGR-encoded mouse event as literal input."""

    @abstractmethod
    def resize_pane(self, target: str, width: int, height: int) -> None:
        """Resize a pane to width x height cells."""

    @abstractmethod
    def set_manual_sizing(self, session: str) -> None:
        """Stop pane sizes following the attached client's terminal size."""

    @abstractmethod
    def query_pane_size(self, target: str) -> PaneSize:
        """Query pane dimensions.

        Returns:
            PaneSize with found=False on any failure.
        """

    @abstractmethod
    def capture_pane_output(self, target: str, scrollback: int = 0) -> str:
        """Capture pane content with ANSI styling preserved.

        Args:
            target: Pane target.
            scrollback: Lines of history to include; 0 or negative captures the
                visible screen only.

        Raises:
            ExternalProcessError: If the target does not exist.
        """

    @abstractmethod
    def load_clipboard_buffer(self, text: str) -> None:
        """Stage text in the multiplexer's paste buffer."""

    @abstractmethod
    def paste_clipboard_buffer(self, target: str) -> None:
        """Paste the staged buffer into target and delete it."""
