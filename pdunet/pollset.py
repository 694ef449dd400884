"""A set of file descriptors polled for readability."""

from __future__ import annotations

import select
from typing import Protocol, Union

POLL_WAIT_FOREVER = -1


class _HasFileno(Protocol):
    def fileno(self) -> int: ...


FileLike = Union[int, _HasFileno]


def _fd(fd: FileLike) -> int:
    return fd if isinstance(fd, int) else fd.fileno()


class PollSet:
    """Descriptors watched for input; poll() reports the lowest ready one."""

    def __init__(self) -> None:
        self._poller = select.poll()
        self._fds: set[int] = set()

    def add(self, fd: FileLike) -> None:
        """Watch a descriptor (or object with fileno()) for input."""
        number = _fd(fd)
        self._poller.register(number, select.POLLIN)
        self._fds.add(number)

    def remove(self, fd: FileLike) -> None:
        """Stop watching a descriptor; unknown descriptors are ignored."""
        number = _fd(fd)
        if number in self._fds:
            self._fds.discard(number)
            self._poller.unregister(number)

    def poll(self, timeout_ms: int | None = POLL_WAIT_FOREVER) -> int | None:
        """Wait for activity and return the lowest ready descriptor.

        A negative or None timeout blocks forever, 0 returns at once.
        Returns None when the timeout expires with nothing ready.
        """
        if timeout_ms is not None and timeout_ms < 0:
            timeout_ms = None
        ready = [fd for fd, events in self._poller.poll(timeout_ms) if events]
        return min(ready, default=None)

    def __contains__(self, fd: object) -> bool:
        try:
            return _fd(fd) in self._fds  # type: ignore[arg-type]
        except AttributeError:
            return False

    def __len__(self) -> int:
        return len(self._fds)