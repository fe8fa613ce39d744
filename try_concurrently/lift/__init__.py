"""
Promise constructors.

    from try_concurrently import lift as L

    main = L.ok(user)
    auth = L.fail(Denied())
    metrics = L.never()
    scripted = L.from_polls(PENDING, Ready(Ok(1)))
    guarded = L.once(third_party_promise)
"""

from __future__ import annotations

from .guard import Once, once
from .up import fail, from_polls, never, ok, ready

__all__ = (
    # Up
    "ready",
    "ok",
    "fail",
    "never",
    "from_polls",
    # Guard
    "Once",
    "once",
)
