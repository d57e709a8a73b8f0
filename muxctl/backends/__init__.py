"""Multiplexer backend factory.

This module picks the process-wide multiplexer backend, allowing the
application to drive tmux or psmux through a common interface.

Usage:
    from muxctl.backends import get_backend

    backend = get_backend()  # Config setting, else host platform default
    backend = get_backend("tmux")  # Force specific backend

    if backend.is_available():
        sessions = backend.list_sessions("dev-")
"""

import logging
import platform

from muxctl.backends.base import MultiplexerBackend
from muxctl.backends.psmux import PsmuxBackend
from muxctl.backends.tmux import TmuxBackend
from muxctl.errors import UnavailableBackend
from muxctl.parsing import PaneSize
from muxctl.services.config_service import get_config_service
from muxctl.services.operation_logging_service import OperationLoggingService

logger = logging.getLogger(__name__)

__all__ = [
    "MultiplexerBackend",
    "PaneSize",
    "PsmuxBackend",
    "TmuxBackend",
    "default_backend_name",
    "get_backend",
    "reset_backend",
]

BACKENDS: dict[str, type[TmuxBackend]] = {
    "tmux": TmuxBackend,
    "psmux": PsmuxBackend,
}

# Cached backend instance
_backend_instance: MultiplexerBackend | None = None
_cached_backend_name: str | None = None


def default_backend_name() -> str:
    """Return the platform-default backend: psmux on Windows, tmux elsewhere."""
    if platform.system() == "Windows":
        return "psmux"
    return "tmux"


def get_backend(backend_name: str | None = None) -> MultiplexerBackend:
    """Get the configured multiplexer backend.

    Args:
        backend_name: Override to use a specific backend ("tmux" or "psmux").
            If None, reads from config; "auto" selects by host platform.

    Returns:
        MultiplexerBackend instance, created once and reused.

    Raises:
        UnavailableBackend: If an unknown backend name is specified.
    """
    global _backend_instance, _cached_backend_name

    config = get_config_service().get_config()
    if backend_name is None:
        backend_name = config.backend
    if backend_name == "auto":
        backend_name = default_backend_name()

    if _backend_instance is not None and _cached_backend_name == backend_name:
        return _backend_instance

    backend_cls = BACKENDS.get(backend_name)
    if backend_cls is None:
        raise UnavailableBackend(f"Unknown multiplexer backend: {backend_name}")

    log_service = None
    if config.operation_logging.enabled:
        log_service = OperationLoggingService.from_config(config.operation_logging)

    logger.debug(f"Using {backend_name} backend")
    _backend_instance = backend_cls(timeout=config.command_timeout, log_service=log_service)
    _cached_backend_name = backend_name
    return _backend_instance


def reset_backend() -> None:
    """Clear the cached backend instance.

    Call this if the configuration changes and the backend needs to be
    re-created.
    """
    global _backend_instance, _cached_backend_name
    _backend_instance = None
    _cached_backend_name = None
