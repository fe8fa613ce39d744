from .fluent.fn import concurrently_policy
from .policy import ConcurrentlyPolicy
from .slots import Necessity, SideEntry, SideSlots, Timing
from .try_concurrently import State, TryConcurrently, try_concurrently

__all__ = (
    # Policy
    "ConcurrentlyPolicy",
    "concurrently_policy",
    # Slots
    "Necessity",
    "SideEntry",
    "SideSlots",
    "Timing",
    # Combinator
    "State",
    "TryConcurrently",
    "try_concurrently",
)
