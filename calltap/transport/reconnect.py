"""Bounded reconnect policy for the monitor stream connection."""

import logging
from enum import Enum
from typing import Optional

from ..errors import InvalidTransition

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Lifecycle state of the stream connection."""
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RETRYING = "retrying"
    FAILED = "failed"


class ReconnectPolicy:
    """State machine deciding whether and when to reconnect after a close.
    
    The attempt counter only grows across consecutive failures; a successful
    connection resets it.
    """
    
    def __init__(self,
                 max_attempts: int = 5,
                 delay_seconds: float = 5.0,
                 backoff_multiplier: float = 1.0,
                 max_delay_seconds: float = 60.0):
        """Initialize reconnect policy.
        
        Args:
            max_attempts: Reconnects allowed in a row before giving up (0 disables)
            delay_seconds: Wait before the first reconnect
            backoff_multiplier: Factor applied to the wait on each further attempt
            max_delay_seconds: Upper bound on any single wait
        """
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_seconds = max_delay_seconds
        
        self.state = ConnectionState.IDLE
        self.attempts = 0
    
    def _transition(self, target: ConnectionState, *allowed: ConnectionState) -> None:
        if self.state not in allowed:
            raise InvalidTransition(f"Cannot go from {self.state.value} to {target.value}")
        logger.debug(f"Connection state: {self.state.value} -> {target.value}")
        self.state = target
    
    def start(self) -> None:
        self._transition(ConnectionState.CONNECTING, ConnectionState.IDLE, ConnectionState.FAILED)
        self.attempts = 0
    
    def on_connected(self) -> None:
        self._transition(ConnectionState.CONNECTED, ConnectionState.CONNECTING)
        self.attempts = 0
    
    def on_disconnected(self) -> Optional[float]:
        """Record a close or failed connect.
        
        Returns:
            Seconds to wait before reconnecting, or None when retries are exhausted
        """
        if self.attempts >= self.max_attempts:
            self._transition(ConnectionState.FAILED,
                             ConnectionState.CONNECTING, ConnectionState.CONNECTED)
            logger.error("Max retries reached. Unable to reconnect.")
            return None
        
        self._transition(ConnectionState.RETRYING,
                         ConnectionState.CONNECTING, ConnectionState.CONNECTED)
        self.attempts += 1
        delay = self.next_delay(self.attempts)
        logger.info(f"Reconnecting... Attempt {self.attempts} of {self.max_attempts} "
                    f"in {delay:.1f}s")
        return delay
    
    def on_retry(self) -> None:
        self._transition(ConnectionState.CONNECTING, ConnectionState.RETRYING)
    
    def stop(self) -> None:
        logger.debug(f"Connection state: {self.state.value} -> idle")
        self.state = ConnectionState.IDLE
    
    def next_delay(self, attempt: int) -> float:
        """Wait before the given (1-based) reconnect attempt."""
        delay = self.delay_seconds * (self.backoff_multiplier ** (attempt - 1))
        return min(delay, self.max_delay_seconds)
