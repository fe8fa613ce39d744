"""
Poll-driven promise combinator.

Drives one main promise together with side promises from a single thread.
Side promises are polled before (push) or after (pull) main on every round,
and either must succeed (necessary) or run for effect only (optional).

Architecture:
- poll: the Pending / Ready suspension signal
- lift: promise constructors (ok, fail, never, from_polls, once)
- concurrency: TryConcurrently engine, builders and policy
- time: deadline side promise
"""

# Core types
from ._types import NoError, Promise, Release, TryPromise

# Internal helpers (for custom promises)
from . import _helpers

# Poll
from .poll import PENDING, Pending, Poll, Ready, is_ready, map_poll, poll_to_string

# Lift helpers
from . import lift
from .lift import Once, fail, from_polls, never, ok, once, ready

# Combinator
from .concurrency import (
    ConcurrentlyPolicy,
    Necessity,
    SideEntry,
    SideSlots,
    State,
    Timing,
    TryConcurrently,
    concurrently_policy,
    try_concurrently,
)

# Time
from .time import Deadline, deadline

# Errors
from ._errors import (
    CombinatorClosedError,
    CombinatorMovedError,
    ContractViolationError,
    DeadlineExceededError,
    NotAResultError,
    PollAfterDoneError,
    PollAfterReadyError,
)

__all__ = (
    # Types
    "NoError",
    "Promise",
    "Release",
    "TryPromise",
    # Internal helpers (for custom promises)
    "_helpers",
    # Poll
    "PENDING",
    "Pending",
    "Poll",
    "Ready",
    "is_ready",
    "map_poll",
    "poll_to_string",
    # Lift module (namespace import - preferred)
    "lift",
    # Lift functions (direct import)
    "Once",
    "fail",
    "from_polls",
    "never",
    "ok",
    "once",
    "ready",
    # Combinator
    "ConcurrentlyPolicy",
    "Necessity",
    "SideEntry",
    "SideSlots",
    "State",
    "Timing",
    "TryConcurrently",
    "concurrently_policy",
    "try_concurrently",
    # Time
    "Deadline",
    "deadline",
    # Errors
    "CombinatorClosedError",
    "CombinatorMovedError",
    "ContractViolationError",
    "DeadlineExceededError",
    "NotAResultError",
    "PollAfterDoneError",
    "PollAfterReadyError",
)
