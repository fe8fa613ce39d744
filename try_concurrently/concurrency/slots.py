"""
Side slots
==========

Side promises sorted by timing (push/pull) and necessity
(necessary/optional). Each category keeps insertion order.
"""

from __future__ import annotations

import enum
import typing
from collections.abc import Iterator
from dataclasses import dataclass, field

from kungfu import Error, Ok, Result

from .._errors import ContractViolationError, NotAResultError
from .._types import Promise
from ..poll import PENDING, Pending, Poll, Ready


class Timing(enum.StrEnum):
    """When a side promise is polled relative to main within a round."""

    PUSH = "push"
    PULL = "pull"


class Necessity(enum.StrEnum):
    """Whether a side promise's outcome counts."""

    NECESSARY = "necessary"
    OPTIONAL = "optional"


# Success payloads of side promises are never observed: every outcome
# collapses to this value or to the Error it carried.
_DISCARDED: typing.Final = Ok(None)


class SideEntry[E]:
    """
    Type-erased side promise.

    poll() yields Ready(Ok(None)) for any success and for any outcome of an
    optional entry, and Ready(Error(e)) for a necessary failure.
    """

    __slots__ = ("promise", "timing", "necessity")

    def __init__(
        self,
        promise: Promise[typing.Any],
        *,
        timing: Timing,
        necessity: Necessity,
    ) -> None:
        self.promise = promise
        self.timing = timing
        self.necessity = necessity

    @property
    def necessary(self) -> bool:
        return self.necessity is Necessity.NECESSARY

    def poll(self) -> Poll[Result[None, E]]:
        match self.promise():
            case Pending():
                return PENDING
            case Ready(_) if not self.necessary:
                return Ready(_DISCARDED)
            case Ready(Ok(_)):
                return Ready(_DISCARDED)
            case Ready(Error() as failure):
                return Ready(failure)
            case Ready(other):
                raise NotAResultError(other)
            case other:
                raise ContractViolationError(f"expected Pending or Ready, got {other!r}")

    def __repr__(self) -> str:
        return f"SideEntry({self.promise!r}, {self.necessity}_{self.timing})"


def _entries() -> list[SideEntry[typing.Any]]:
    return []


@dataclass(slots=True)
class SideSlots[E]:
    """The four ordered side lists owned by one combinator."""

    necessary_push: list[SideEntry[E]] = field(default_factory=_entries)
    optional_push: list[SideEntry[E]] = field(default_factory=_entries)
    necessary_pull: list[SideEntry[E]] = field(default_factory=_entries)
    optional_pull: list[SideEntry[E]] = field(default_factory=_entries)

    def category(self, timing: Timing, necessity: Necessity) -> list[SideEntry[E]]:
        match timing, necessity:
            case Timing.PUSH, Necessity.NECESSARY:
                return self.necessary_push
            case Timing.PUSH, Necessity.OPTIONAL:
                return self.optional_push
            case Timing.PULL, Necessity.NECESSARY:
                return self.necessary_pull
            case Timing.PULL, Necessity.OPTIONAL:
                return self.optional_pull
            case _:
                raise ValueError(f"Unknown side category: {timing!r}, {necessity!r}")

    def add(self, entry: SideEntry[E]) -> None:
        self.category(entry.timing, entry.necessity).append(entry)

    def necessary_done(self) -> bool:
        return not self.necessary_push and not self.necessary_pull

    def counts(self) -> dict[str, int]:
        return {
            "necessary_push": len(self.necessary_push),
            "optional_push": len(self.optional_push),
            "necessary_pull": len(self.necessary_pull),
            "optional_pull": len(self.optional_pull),
        }

    def drain(self) -> Iterator[SideEntry[E]]:
        """Remove and yield every entry, push lists first."""
        for entries in (
            self.necessary_push,
            self.optional_push,
            self.necessary_pull,
            self.optional_pull,
        ):
            taken, entries[:] = entries[:], []
            yield from taken

    def drain_optional(self) -> Iterator[SideEntry[E]]:
        for entries in (self.optional_push, self.optional_pull):
            taken, entries[:] = entries[:], []
            yield from taken


__all__ = ("Necessity", "SideEntry", "SideSlots", "Timing")
