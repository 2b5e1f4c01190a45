"""Event models for pub/sub session notifications."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Any, Dict


@dataclass
class SessionEvent:
    """Session lifecycle event."""
    session_id: str
    event_type: str  # "saved", "discarded", "failed"
    total_bytes: int = 0
    file_path: Optional[str] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: Dict[str, Any] = field(default_factory=dict)
