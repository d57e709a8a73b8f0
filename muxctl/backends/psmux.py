"""psmux terminal multiplexer backend for Windows.

psmux accepts the tmux command vocabulary (new-session, send-keys -l,
capture-pane -e, load-buffer -, ...), so this backend reuses the tmux
command construction and only changes the executable.
"""

from muxctl.backends.tmux import TmuxBackend


class PsmuxBackend(TmuxBackend):
    """psmux-based multiplexer backend (PowerShell multiplexer)."""

    executable = "psmux"
