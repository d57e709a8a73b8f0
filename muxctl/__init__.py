"""muxctl - drive tmux/psmux sessions through a single backend contract."""

__version__ = "0.1.0"
