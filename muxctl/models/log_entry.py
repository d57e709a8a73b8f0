"""Operation log models.

One MuxLogEntry is written per multiplexer invocation.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class MuxLogEntry(BaseModel):
    """Data structure for a multiplexer operation log entry.

    Attributes:
        id: Unique identifier for the log entry.
        timestamp: ISO 8601 timestamp of when the operation ran.
        backend: Backend name ("tmux" or "psmux").
        operation: Contract operation (send_keys, capture_pane_output, ...).
        target: Session name or pane target, None for target-less operations.
        direction: "in" for data read from the multiplexer, "out" for data sent.
        payload: Content sent or received (None when debug logging is off).
        truncated: Whether payload was truncated.
        original_size: Original payload size in bytes (set when truncated).
        success: Whether the invocation succeeded.
        returncode: Exit status of the multiplexer process.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    backend: str
    operation: str
    target: str | None = None
    direction: str = "out"  # "in" or "out"
    payload: str | None = None
    truncated: bool = False
    original_size: int | None = None
    success: bool = True
    returncode: int = 0
