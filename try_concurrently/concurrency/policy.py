from __future__ import annotations

from dataclasses import dataclass

from .._helpers import close_promise
from .._types import Release


@dataclass(frozen=True, slots=True)
class ConcurrentlyPolicy:
    """Configuration for TryConcurrently: how promises are torn down, what gets logged."""

    release: Release = close_promise
    trace_rounds: bool = False

    def __post_init__(self) -> None:
        if not callable(self.release):
            raise ValueError("ConcurrentlyPolicy.release must be callable")


__all__ = ("ConcurrentlyPolicy",)
