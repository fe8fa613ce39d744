from .poll import PENDING, Pending, Poll, Ready, is_ready, map_poll, poll_to_string

__all__ = (
    "PENDING",
    "Pending",
    "Poll",
    "Ready",
    "is_ready",
    "map_poll",
    "poll_to_string",
)
