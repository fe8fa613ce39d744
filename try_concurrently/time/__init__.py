from .deadline import Deadline, deadline

__all__ = ("Deadline", "deadline")
