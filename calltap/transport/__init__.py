"""Monitor stream transport."""

from .listener import StreamListener
from .reconnect import ConnectionState, ReconnectPolicy

__all__ = [
    "StreamListener",
    "ConnectionState",
    "ReconnectPolicy",
]
