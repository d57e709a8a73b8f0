"""Multiplexer operation logging service.

Records one JSONL entry per backend invocation, truncating large payloads
and rotating the file by size.

Directions:
- out: data sent to the multiplexer (send_keys, send_literal, load_clipboard_buffer, ...)
- in: data read back (list_sessions, query_pane_size, capture_pane_output, ...)
"""

import json
import logging
from pathlib import Path

from muxctl.models.config import OperationLoggingConfig
from muxctl.models.log_entry import MuxLogEntry

logger = logging.getLogger(__name__)

LOG_DIR = Path("data") / "logs"
LOG_FILE_NAME = "muxctl.jsonl"


class OperationLoggingService:
    """Service for managing the multiplexer operation log.

    Handles:
    - Creating entries with payload truncation
    - Writing entries with size-based rotation
    """

    def __init__(
        self,
        log_dir: Path | None = None,
        max_log_size_mb: int = 10,
        max_log_files: int = 5,
        max_payload_size: int = 10 * 1024,
        debug_enabled: bool = False,
    ):
        """Initialize the operation logging service.

        Args:
            log_dir: Directory for log files. Defaults to data/logs.
            max_log_size_mb: Rotate when file exceeds this size.
            max_log_files: Number of rotated files to keep.
            max_payload_size: Maximum payload size before truncation.
            debug_enabled: Whether to log payload content.
        """
        self.log_dir = Path(log_dir) if log_dir else LOG_DIR
        self.log_file = self.log_dir / LOG_FILE_NAME
        self.max_log_size_mb = max_log_size_mb
        self.max_log_files = max_log_files
        self.max_payload_size = max_payload_size
        self._debug_enabled = debug_enabled

    @classmethod
    def from_config(cls, config: OperationLoggingConfig) -> "OperationLoggingService":
        """Build a service from the operation_logging config section."""
        return cls(
            log_dir=Path(config.log_dir) if config.log_dir else None,
            max_log_size_mb=config.max_log_size_mb,
            max_log_files=config.max_log_files,
            max_payload_size=config.max_payload_size,
            debug_enabled=config.debug_enabled,
        )

    @property
    def debug_enabled(self) -> bool:
        """Get debug logging state."""
        return self._debug_enabled

    @debug_enabled.setter
    def debug_enabled(self, value: bool) -> None:
        """Set debug logging state."""
        self._debug_enabled = value

    def ensure_log_directory(self) -> None:
        """Ensure the log directory exists."""
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def truncate_payload(self, payload: str | None) -> tuple[str | None, bool, int]:
        """Truncate payload if it exceeds the maximum size.

        Args:
            payload: The payload string to potentially truncate.

        Returns:
            Tuple of (truncated_payload, was_truncated, original_size).
        """
        if payload is None:
            return None, False, 0

        payload_bytes = payload.encode("utf-8")
        original_size = len(payload_bytes)

        if original_size <= self.max_payload_size:
            return payload, False, original_size

        # Cutting mid-character is possible, so decode leniently
        truncated_payload = payload_bytes[: self.max_payload_size].decode("utf-8", errors="ignore")
        truncated_payload += "\n... [TRUNCATED]"

        return truncated_payload, True, original_size

    def create_log_entry(
        self,
        backend: str,
        operation: str,
        target: str | None = None,
        direction: str = "out",
        payload: str | None = None,
        success: bool = True,
        returncode: int = 0,
    ) -> MuxLogEntry:
        """Create a new log entry with auto-generated ID and timestamp.

        Args:
            backend: Backend name.
            operation: Contract operation name.
            target: Session or pane target.
            direction: "in" or "out".
            payload: Content sent or received (only kept if debug_enabled).
            success: Whether the invocation succeeded.
            returncode: Exit status of the process.

        Returns:
            MuxLogEntry instance.
        """
        truncated = False
        original_size = None
        final_payload = None

        if self._debug_enabled and payload is not None:
            final_payload, truncated, orig_size = self.truncate_payload(payload)
            original_size = orig_size if truncated else None

        return MuxLogEntry(
            backend=backend,
            operation=operation,
            target=target,
            direction=direction,
            payload=final_payload,
            truncated=truncated,
            original_size=original_size,
            success=success,
            returncode=returncode,
        )

    def _rotate_log_if_needed(self) -> None:
        """Rotate log file if it exceeds max size.

        Rotation scheme: file.jsonl -> file.jsonl.1 -> file.jsonl.2 -> ...
        Oldest files beyond max_log_files are deleted.
        """
        if not self.log_file.exists():
            return

        try:
            size_mb = self.log_file.stat().st_size / (1024 * 1024)
            if size_mb < self.max_log_size_mb:
                return

            for i in range(self.max_log_files - 1, 0, -1):
                old_name = Path(f"{self.log_file}.{i}")
                new_name = Path(f"{self.log_file}.{i + 1}")
                if old_name.exists():
                    if i + 1 >= self.max_log_files:
                        old_name.unlink()
                    else:
                        old_name.replace(new_name)

            self.log_file.replace(Path(f"{self.log_file}.1"))
            logger.info(f"Rotated log file {self.log_file.name} (exceeded {self.max_log_size_mb}MB)")

        except OSError as e:
            logger.warning(f"Log rotation failed: {e}")

    def write_log_entry(self, entry: MuxLogEntry) -> bool:
        """Append a log entry, rotating the file first if needed.

        Args:
            entry: MuxLogEntry instance.

        Returns:
            True if write was successful.
        """
        try:
            self.ensure_log_directory()
            self._rotate_log_if_needed()
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry.model_dump(mode="json")) + "\n")
            return True
        except OSError as e:
            logger.error(f"Error writing log entry: {e}")
            return False

    def record(
        self,
        backend: str,
        operation: str,
        target: str | None = None,
        direction: str = "out",
        payload: str | None = None,
        success: bool = True,
        returncode: int = 0,
    ) -> bool:
        """Create and write an entry in one step."""
        entry = self.create_log_entry(
            backend=backend,
            operation=operation,
            target=target,
            direction=direction,
            payload=payload,
            success=success,
            returncode=returncode,
        )
        return self.write_log_entry(entry)
