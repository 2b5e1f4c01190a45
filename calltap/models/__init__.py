"""Data models for the CallTap application."""

from .call import CallInfo
from .events import SessionEvent

__all__ = [
    "CallInfo",
    "SessionEvent",
]
