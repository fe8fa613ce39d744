from __future__ import annotations


class ContractViolationError(AssertionError):
    """A promise or combinator was used outside of its contract."""


class PollAfterReadyError(ContractViolationError):
    """Promise was polled again after it returned Ready."""

    def __init__(self, promise: object) -> None:
        self.promise = promise
        super().__init__(f"{promise!r} polled after it resolved")


class PollAfterDoneError(ContractViolationError):
    """Combinator was used after it finished."""

    def __init__(self) -> None:
        super().__init__("combinator used after it finished")


class CombinatorClosedError(ContractViolationError):
    """Combinator was used after close()."""

    def __init__(self) -> None:
        super().__init__("combinator used after close()")


class CombinatorMovedError(ContractViolationError):
    """Combinator was used after its promises moved to another value."""

    def __init__(self) -> None:
        super().__init__("combinator used after being moved")


class NotAResultError(ContractViolationError):
    """Main or a necessary side promise resolved to something other than Ok/Error."""

    value: object

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"expected Ok or Error, got {value!r}")


class DeadlineExceededError(Exception):
    """Deadline side promise ran out of time."""

    seconds: float

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"Deadline of {seconds}s exceeded")


__all__ = (
    "CombinatorClosedError",
    "CombinatorMovedError",
    "ContractViolationError",
    "DeadlineExceededError",
    "NotAResultError",
    "PollAfterDoneError",
    "PollAfterReadyError",
)
