"""Call-related data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CallInfo:
    """Handles returned when an outbound call is created."""
    listen_url: str  # Monitor WebSocket streaming the call's PCM audio
    control_url: str  # HTTP endpoint accepting live-call commands
    call_id: Optional[str] = None
