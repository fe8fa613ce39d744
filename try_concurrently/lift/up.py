"""
Lifting plain values into promises.

Each constructor returns a promise honouring the resolve-once contract:
polling it again after it returned Ready raises PollAfterReadyError.
"""

from __future__ import annotations

from typing import Never

from kungfu import Error, Ok, Result

from .._errors import PollAfterReadyError
from .._types import Promise
from ..poll import PENDING, Pending, Poll, Ready


class _Script[T]:
    """Promise replaying a fixed sequence of polls."""

    __slots__ = ("_polls", "_resolved")

    def __init__(self, polls: tuple[Poll[T], ...]) -> None:
        self._polls = list(polls)
        self._resolved = False

    def __call__(self) -> Poll[T]:
        if self._resolved:
            raise PollAfterReadyError(self)
        if not self._polls:
            return PENDING
        poll = self._polls.pop(0)
        if isinstance(poll, Ready):
            self._resolved = True
        return poll

    def __repr__(self) -> str:
        return f"from_polls({', '.join(map(repr, self._polls))})"


def ready[T](value: T) -> Promise[T]:
    """
    Promise resolving immediately to value.

    Example:
        p = L.ready("x")
        p()  # Ready("x")
    """
    return _Script((Ready(value),))


def ok[T](value: T) -> Promise[Result[T, Never]]:
    """Promise resolving immediately to Ok(value)."""
    return ready(Ok(value))


def fail[E](error: E) -> Promise[Result[Never, E]]:
    """
    Promise resolving immediately to Error(error). Dual of ok().

    NOTE: the error is returned, never raised.
    """
    return ready(Error(error))


def never() -> Promise[Never]:
    """Promise that stays Pending forever."""

    def pending() -> Pending:
        return PENDING

    return pending


def from_polls[T](*polls: Poll[T]) -> Promise[T]:
    """
    Promise replaying polls one per call.

    Past the end of the script it keeps returning Pending. A script that
    ended on Ready raises PollAfterReadyError instead, like any other
    resolved promise.

    Example:
        p = L.from_polls(PENDING, Ready(Ok(1)))
        p()  # Pending()
        p()  # Ready(Ok(1))
    """
    return _Script(polls)


__all__ = ("fail", "from_polls", "never", "ok", "ready")
