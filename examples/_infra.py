from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from kungfu import Error, Ok, Result

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from try_concurrently import PENDING, Poll, Ready  # noqa: E402


@dataclass(frozen=True, slots=True)
class Failure(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover (examples only)
        return self.message


@dataclass(slots=True)
class SlowHandler:
    """Main request logic that needs a few rounds before answering."""

    rounds_needed: int
    body: str

    def __call__(self) -> Poll[Result[str, Failure]]:
        if self.rounds_needed > 0:
            self.rounds_needed -= 1
            return PENDING
        return Ready(Ok(self.body))


@dataclass(slots=True)
class AuthCheck:
    token: str
    allowed: frozenset[str] = frozenset({"secret"})

    def __call__(self) -> Poll[Result[None, Failure]]:
        if self.token in self.allowed:
            return Ready(Ok(None))
        return Ready(Error(Failure(f"token {self.token!r} rejected")))


@dataclass(slots=True)
class MetricsSink:
    """Best-effort trailing hook; records every call it gets polled for."""

    events: list[str] = field(default_factory=list)
    closed: bool = False

    def __call__(self) -> Poll[Result[None, Failure]]:
        self.events.append("emit")
        return PENDING

    def close(self) -> None:
        self.closed = True


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")
