"""Contract guard for third-party promises."""

from __future__ import annotations

from .._errors import PollAfterReadyError
from .._helpers import close_promise
from .._types import Promise
from ..poll import Poll, Ready


class Once[T]:
    """
    Wraps a promise and enforces the resolve-once contract.

    Polling after Ready raises PollAfterReadyError instead of calling the
    inner promise again. close() is forwarded to the inner promise at most once.
    """

    __slots__ = ("_promise", "_resolved", "_closed")

    def __init__(self, promise: Promise[T], /) -> None:
        self._promise = promise
        self._resolved = False
        self._closed = False

    def __call__(self) -> Poll[T]:
        if self._resolved:
            raise PollAfterReadyError(self._promise)
        poll = self._promise()
        if isinstance(poll, Ready):
            self._resolved = True
        return poll

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close_promise(self._promise)

    @property
    def resolved(self) -> bool:
        return self._resolved

    def __repr__(self) -> str:
        return f"once({self._promise!r})"


def once[T](promise: Promise[T]) -> Once[T]:
    """Guard promise against being polled after it resolved."""
    return Once(promise)


__all__ = ("Once", "once")
