"""Deadline side promise

Timeouts are not built into the combinator; a deadline is one more
side promise, usually attached with necessary_pull."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Never

from kungfu import Error, Result

from .._errors import DeadlineExceededError, PollAfterReadyError
from ..poll import PENDING, Poll, Ready


class Deadline:
    """Pending until `seconds` have passed since creation, then fails once."""

    __slots__ = ("seconds", "_clock", "_expires_at", "_resolved")

    def __init__(self, seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        if seconds < 0.0:
            raise ValueError("seconds must be >= 0")
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds
        self._resolved = False

    def __call__(self) -> Poll[Result[Never, DeadlineExceededError]]:
        if self._resolved:
            raise PollAfterReadyError(self)
        if self._clock() < self._expires_at:
            return PENDING
        self._resolved = True
        return Ready(Error(DeadlineExceededError(self.seconds)))

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    def __repr__(self) -> str:
        return f"deadline({self.seconds}s)"


def deadline(seconds: float, *, clock: Callable[[], float] = time.monotonic) -> Deadline:
    """
    Side promise failing with DeadlineExceededError after `seconds`.

    Example:
        call = try_concurrently(main).necessary_pull(deadline(2.0))
    """
    return Deadline(seconds, clock=clock)


__all__ = ("Deadline", "deadline")
