"""Non-blocking advisory file locks.

Used by callers that share a manifest file between processes. Locks never
wait: a held lock surfaces immediately as an OSError, and is_lock_busy()
tells the caller whether that error means "held by another process" so it
can choose its own retry policy.

Platform notes:
- Unix: fcntl.flock() with LOCK_NB, shared or exclusive.
- Windows: msvcrt.locking() on byte 0, seeking there first; shared locks
  are not available, so every lock is exclusive.
"""

import errno
import os
import platform
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

_system = platform.system()
if TYPE_CHECKING or _system == "Windows":
    import msvcrt  # type: ignore[import-not-found]
if TYPE_CHECKING or _system != "Windows":
    import fcntl  # type: ignore[import-not-found]

_BUSY_ERRNOS = {errno.EWOULDBLOCK, errno.EAGAIN}
# msvcrt.locking reports a region held elsewhere as EACCES or EDEADLOCK
_WINDOWS_BUSY_ERRNOS = {errno.EACCES, getattr(errno, "EDEADLOCK", errno.EDEADLK)}


def lock_file(fd: int, exclusive: bool = True) -> None:
    """Acquire a non-blocking lock on an open file descriptor.

    Raises:
        OSError: If the lock cannot be taken; check is_lock_busy().
    """
    if _system == "Windows":
        os.lseek(fd, 0, os.SEEK_SET)
        msvcrt.locking(fd, msvcrt.LK_NBLCK, 1)  # type: ignore[attr-defined]
    else:
        lock_type = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(fd, lock_type | fcntl.LOCK_NB)


def unlock_file(fd: int) -> None:
    """Release a lock taken with lock_file()."""
    if _system == "Windows":
        os.lseek(fd, 0, os.SEEK_SET)
        msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)  # type: ignore[attr-defined]
    else:
        fcntl.flock(fd, fcntl.LOCK_UN)


def is_lock_busy(exc: BaseException) -> bool:
    """Return True if exc means the lock is held by another process."""
    if isinstance(exc, BlockingIOError):
        return True
    if not isinstance(exc, OSError):
        return False
    if _system == "Windows" and exc.errno in _WINDOWS_BUSY_ERRNOS:
        return True
    return exc.errno in _BUSY_ERRNOS


@contextmanager
def locked_file(path: Path, exclusive: bool = True) -> Generator[int, None, None]:
    """Hold a lock on path for the duration of the block.

    The file is created if missing. Yields the locked file descriptor.

    Raises:
        OSError: If the lock is busy (is_lock_busy() is True) or the file
            cannot be opened.
    """
    with open(path, "a+b") as handle:
        fd = handle.fileno()
        lock_file(fd, exclusive=exclusive)
        try:
            yield fd
        finally:
            unlock_file(fd)
