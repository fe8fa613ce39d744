"""
Core type definitions.

Type aliases used across the library.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from kungfu import Result

from .poll import Poll

# ============================================================================
# Type aliases
# ============================================================================

# Promise = repeatable zero-argument computation, resolves exactly once
type Promise[T] = Callable[[], Poll[T]]

# TryPromise = promise resolving to Result (main and necessary side promises)
type TryPromise[T, E] = Promise[Result[T, E]]

# Release = teardown hook run once per promise the combinator owned
type Release = Callable[[object], None]

# NoError = "never fails"
type NoError = typing.Never

__all__ = (
    "NoError",
    "Promise",
    "Release",
    "TryPromise",
)
