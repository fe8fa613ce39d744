"""
TryConcurrently
===============

Poll-driven combinator: one main promise plus side promises, all driven
from a single thread by repeatedly calling the combinator.

Each round polls, in order:

1. necessary push entries  (failure ends the combination)
2. optional push entries   (outcome discarded)
3. main                    (failure ends the combination)
4. necessary pull entries  (failure ends the combination)
5. optional pull entries   (outcome discarded)

and finishes with Ok once main has resolved and no necessary entry is
left. The first failure met in that order is returned as-is.

Example:
    from try_concurrently import lift as L, try_concurrently

    call = (
        try_concurrently(handle_request)
        .necessary_push(check_authorization)
        .pull(emit_metrics)
    )
    while isinstance(poll := call(), Pending):
        wait_for_wakeup()
"""

from __future__ import annotations

import enum
import logging
import typing

from kungfu import Error, Ok, Result

from .._errors import (
    CombinatorClosedError,
    CombinatorMovedError,
    ContractViolationError,
    NotAResultError,
    PollAfterDoneError,
)
from .._helpers import release_quietly
from .._types import Promise, TryPromise
from ..poll import PENDING, Pending, Poll, Ready, poll_to_string
from .policy import ConcurrentlyPolicy
from .slots import Necessity, SideEntry, SideSlots, Timing

logger = logging.getLogger(__name__)


class State(enum.StrEnum):
    RUNNING = "running"
    DONE = "done"
    CLOSED = "closed"
    MOVED = "moved"


class TryConcurrently[T, E]:
    """
    Main promise + side promises, polled together one round per call.

    Move-only: every builder consumes this value and returns a new one that
    owns all of its promises. The consumed value owns nothing and refuses to
    be polled. Every promise handed over is released exactly once through
    ``policy.release``: when it resolves, when the combination finishes
    without it, or when a running combinator is closed.
    """

    __slots__ = ("_main", "_value", "_slots", "_state", "_outcome", "_policy")

    def __init__(
        self,
        main: TryPromise[T, E],
        /,
        *,
        policy: ConcurrentlyPolicy = ConcurrentlyPolicy(),
    ) -> None:
        self._main: TryPromise[T, E] | None = main
        self._value: Ok[T] | None = None
        self._slots: SideSlots[E] = SideSlots()
        self._state = State.RUNNING
        self._outcome: Result[T, E] | None = None
        self._policy = policy

    # Builders

    def necessary_push[U](self, promise: TryPromise[U, E], /) -> TryConcurrently[T, E]:
        """Poll promise before main every round; its failure fails the whole."""
        return self.with_side(promise, timing=Timing.PUSH, necessity=Necessity.NECESSARY)

    def push(self, promise: Promise[typing.Any], /) -> TryConcurrently[T, E]:
        """Poll promise before main every round; ignore how it ends."""
        return self.with_side(promise, timing=Timing.PUSH, necessity=Necessity.OPTIONAL)

    def necessary_pull[U](self, promise: TryPromise[U, E], /) -> TryConcurrently[T, E]:
        """Poll promise after main every round; its failure fails the whole."""
        return self.with_side(promise, timing=Timing.PULL, necessity=Necessity.NECESSARY)

    def pull(self, promise: Promise[typing.Any], /) -> TryConcurrently[T, E]:
        """Poll promise after main every round; ignore how it ends."""
        return self.with_side(promise, timing=Timing.PULL, necessity=Necessity.OPTIONAL)

    def with_side(
        self,
        promise: Promise[typing.Any],
        /,
        *,
        timing: Timing,
        necessity: Necessity,
    ) -> TryConcurrently[T, E]:
        """Generic builder: the four named builders delegate here."""
        moved = self.move()
        moved._slots.add(SideEntry(promise, timing=timing, necessity=necessity))
        return moved

    def move(self) -> TryConcurrently[T, E]:
        """
        Transfer ownership of every promise to a new combinator.

        Nothing is polled or released; this value is left empty.
        """
        self._ensure_running()
        moved = object.__new__(type(self))
        moved._main = self._main
        moved._value = self._value
        moved._slots = self._slots
        moved._state = State.RUNNING
        moved._outcome = None
        moved._policy = self._policy
        self._main = None
        self._value = None
        self._slots = SideSlots()
        self._state = State.MOVED
        return moved

    # Polling

    def __call__(self) -> Poll[Result[T, E]]:
        """Run one round. Returns Pending, or Ready with the final Result."""
        self._ensure_running()

        if (failure := self._scan(self._slots.necessary_push)) is not None:
            return self._fail(failure)
        self._scan(self._slots.optional_push)

        if self._main is not None:
            main = self._main
            poll = main()
            self._trace(main, poll)
            match poll:
                case Pending():
                    pass
                case Ready(Ok() as value):
                    self._main = None
                    self._value = value
                    self._release(main)
                case Ready(Error() as failure):
                    self._main = None
                    self._release(main)
                    return self._fail(failure)
                case Ready(other):
                    raise NotAResultError(other)
                case other:
                    raise ContractViolationError(f"expected Pending or Ready, got {other!r}")

        if (failure := self._scan(self._slots.necessary_pull)) is not None:
            return self._fail(failure)
        self._scan(self._slots.optional_pull)

        if self._value is not None and self._slots.necessary_done():
            return self._finish(self._value)
        return PENDING

    def _scan(self, entries: list[SideEntry[E]]) -> Error[E] | None:
        """Poll every entry once; drop resolved ones. Stops at the first failure."""
        still_pending: list[SideEntry[E]] = []
        consumed = 0
        try:
            for entry in entries:
                poll = entry.poll()
                self._trace(entry, poll)
                consumed += 1
                match poll:
                    case Pending():
                        still_pending.append(entry)
                    case Ready(Error() as failure):
                        self._release(entry.promise)
                        return failure
                    case Ready(_):
                        self._release(entry.promise)
            return None
        finally:
            # Entries not reached (or whose poll raised) stay owned.
            entries[:] = still_pending + entries[consumed:]

    # Transitions

    def _finish(self, value: Ok[T]) -> Ready[Result[T, E]]:
        cancelled = 0
        for entry in self._slots.drain_optional():
            self._release(entry.promise)
            cancelled += 1
        self._value = None
        self._outcome = value
        self._state = State.DONE
        logger.debug("Finished ok, cancelled %d optional side promise(s)", cancelled)
        return Ready(value)

    def _fail(self, failure: Error[E]) -> Ready[Result[T, E]]:
        self._teardown()
        self._outcome = failure
        self._state = State.DONE
        logger.debug("Failed with %r", failure)
        return Ready(failure)

    def close(self) -> None:
        """
        Cancel a running combinator: release every unresolved promise.

        No-op once done, closed or moved; nothing is released twice.
        """
        if self._state is not State.RUNNING:
            return
        self._teardown()
        self._state = State.CLOSED
        logger.debug("Closed while running")

    def _teardown(self) -> None:
        main, self._main = self._main, None
        self._value = None
        if main is not None:
            self._release(main)
        for entry in self._slots.drain():
            self._release(entry.promise)

    def _release(self, promise: object) -> None:
        release_quietly(self._policy.release, promise)

    def _trace(self, promise: object, poll: Poll[typing.Any]) -> None:
        if self._policy.trace_rounds:
            logger.debug("Polled %r -> %s", promise, poll_to_string(poll))

    def _ensure_running(self) -> None:
        match self._state:
            case State.RUNNING:
                return
            case State.DONE:
                raise PollAfterDoneError()
            case State.CLOSED:
                raise CombinatorClosedError()
            case State.MOVED:
                raise CombinatorMovedError()
            case _ as unreachable:
                typing.assert_never(unreachable)

    # Inspection

    @property
    def state(self) -> State:
        return self._state

    @property
    def outcome(self) -> Result[T, E] | None:
        """Final result once done, None before."""
        return self._outcome

    def pending_sides(self) -> dict[str, int]:
        """Unresolved side promises per category."""
        return self._slots.counts()

    # Protocol methods

    def __enter__(self) -> TryConcurrently[T, E]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        # Partially constructed instances have no state yet.
        if getattr(self, "_state", None) is State.RUNNING:
            self.close()

    def __copy__(self) -> typing.NoReturn:
        raise TypeError("TryConcurrently is move-only, use move()")

    def __deepcopy__(self, memo: dict[int, object]) -> typing.NoReturn:
        raise TypeError("TryConcurrently is move-only, use move()")

    def __repr__(self) -> str:
        sides = ", ".join(f"{name}={count}" for name, count in self._slots.counts().items())
        main = "resolved" if self._value is not None else repr(self._main)
        return f"TryConcurrently({self._state}, main={main}, {sides})"


def try_concurrently[T, E](
    main: TryPromise[T, E],
    /,
    *,
    policy: ConcurrentlyPolicy = ConcurrentlyPolicy(),
) -> TryConcurrently[T, E]:
    """Start a combination around main. Attach side promises with the builders."""
    return TryConcurrently(main, policy=policy)


__all__ = ("State", "TryConcurrently", "try_concurrently")
