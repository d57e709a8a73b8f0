"""Configuration models with Pydantic validation."""


from pydantic import BaseModel, Field


class OperationLoggingConfig(BaseModel):
    """Operation logging configuration.

    Controls the JSONL record of every multiplexer invocation. When debug is
    disabled, payloads (keys, literal text, captured output) are not recorded.
    """

    enabled: bool = Field(
        default=False,
        description="Record each multiplexer invocation to the operation log",
    )
    debug_enabled: bool = Field(
        default=False,
        description="Include payload content in log entries",
    )
    max_payload_size: int = Field(
        default=10 * 1024,  # 10KB
        ge=1024,
        le=1024 * 1024,  # 1MB max
        description="Maximum payload size before truncation (bytes)",
    )
    max_log_size_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Rotate log when file exceeds this size (MB)",
    )
    max_log_files: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Number of rotated log files to keep",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for the operation log (defaults to data/logs)",
    )


class MuxConfig(BaseModel):
    """Root configuration.

    Loaded from muxctl.yaml and validated with Pydantic.
    """

    backend: str = Field(
        default="auto",
        pattern="^(auto|tmux|psmux)$",
        description="Multiplexer backend ('auto' picks by host platform)",
    )
    command_timeout: int = Field(
        default=10,
        ge=1,
        le=300,
        description="Seconds to wait for each multiplexer invocation",
    )
    operation_logging: OperationLoggingConfig = Field(
        default_factory=OperationLoggingConfig,
        description="Operation logging configuration",
    )
