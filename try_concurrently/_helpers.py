"""Internal helpers.

Teardown functions shared by the combinator and the promise constructors.
Not part of the public API, but usable when writing custom promises."""

from __future__ import annotations

import logging

from ._types import Release

logger = logging.getLogger(__name__)


def close_promise(promise: object) -> None:
    """
    Default teardown: call ``promise.close()`` if the promise has one.

    Plain functions and lambdas have nothing to release.
    """
    close = getattr(promise, "close", None)
    if callable(close):
        close()


def release_quietly(release: Release, promise: object) -> None:
    """
    Run a teardown hook, logging instead of propagating its failure.

    Used while tearing down many promises at once: one failing teardown
    must not leak the rest.
    """
    try:
        release(promise)
    except Exception:
        logger.exception("Releasing %r failed", promise)


__all__ = ("close_promise", "release_quietly")
