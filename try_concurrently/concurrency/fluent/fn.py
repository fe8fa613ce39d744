from __future__ import annotations

from ..._helpers import close_promise
from ..._types import Release
from ..policy import ConcurrentlyPolicy


def concurrently_policy(
    *,
    release: Release = close_promise,
    trace_rounds: bool = False,
) -> ConcurrentlyPolicy:
    # Validation happens inside ConcurrentlyPolicy.__post_init__.
    return ConcurrentlyPolicy(release=release, trace_rounds=trace_rounds)

__all__ = ("concurrently_policy",)
