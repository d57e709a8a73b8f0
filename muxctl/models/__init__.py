"""Pydantic models for muxctl configuration and operation logs."""

from muxctl.models.config import MuxConfig, OperationLoggingConfig
from muxctl.models.log_entry import MuxLogEntry

__all__ = [
    "MuxConfig",
    "MuxLogEntry",
    "OperationLoggingConfig",
]
