"""Exceptions raised by multiplexer backends."""


class MuxError(Exception):
    """Base exception for all multiplexer operations."""


class UnavailableBackend(MuxError):
    """Raised when a requested backend is unknown or not on the search path."""


class ExternalProcessError(MuxError):
    """Raised when the multiplexer exits non-zero or its reply cannot be parsed.

    Attributes:
        command: Full argument list that was executed.
        returncode: Exit status of the process (1 for timeouts and parse failures).
        stderr: Diagnostic text produced by the multiplexer.
    """

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"{' '.join(self.command)} exited with status {returncode}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)
