"""
Poll - the suspension signal
============================

Every promise answers a poll with either ``Pending`` (not done yet, poll
again later) or ``Ready(value)`` (done, never poll again).
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pending:
    """Not resolved yet."""

    def __repr__(self) -> str:
        return "Pending()"


@dataclass(frozen=True, slots=True)
class Ready[T]:
    """Resolved with a value."""

    value: T

    def map[U](self, f: Callable[[T], U], /) -> Ready[U]:
        return Ready(f(self.value))


# Poll = either pending or ready with a value
type Poll[T] = Pending | Ready[T]

PENDING: typing.Final = Pending()


def is_ready[T](poll: Poll[T]) -> typing.TypeGuard[Ready[T]]:
    return isinstance(poll, Ready)


def map_poll[T, U](poll: Poll[T], f: Callable[[T], U]) -> Poll[U]:
    """Apply f to a ready value, leave Pending untouched."""
    match poll:
        case Ready(value):
            return Ready(f(value))
        case Pending():
            return PENDING
        case _ as unreachable:
            typing.assert_never(unreachable)


def poll_to_string[T](poll: Poll[T], fmt: Callable[[T], str] = repr) -> str:
    """
    Render a poll for diagnostics.

    Example:
        poll_to_string(PENDING)         # "<<pending>>"
        poll_to_string(Ready(Ok(1)))    # "<<ready:Ok(1)>>"
    """
    match poll:
        case Ready(value):
            return f"<<ready:{fmt(value)}>>"
        case Pending():
            return "<<pending>>"
        case _ as unreachable:
            typing.assert_never(unreachable)


__all__ = ("PENDING", "Pending", "Poll", "Ready", "is_ready", "map_poll", "poll_to_string")
