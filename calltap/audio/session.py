"""Per-connection accumulator for streamed PCM audio."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from ..errors import SessionClosed

logger = logging.getLogger(__name__)


class AudioSession:
    """Accumulates binary frames from one stream connection until it is finalized."""
    
    def __init__(self,
                 sample_rate: int = 16000,
                 channels: int = 2,
                 bits_per_sample: int = 16,
                 created_at: Optional[datetime] = None,
                 session_id: Optional[str] = None):
        """Initialize an empty session.
        
        Args:
            sample_rate: Sample rate of the incoming PCM stream
            channels: Number of interleaved channels
            bits_per_sample: Sample width in bits
            created_at: Session start time (defaults to now, UTC)
            session_id: Identifier used in logs (random if not given)
        """
        self.sample_rate = sample_rate
        self.channels = channels
        self.bits_per_sample = bits_per_sample
        self.created_at = created_at or datetime.now(timezone.utc)
        self.session_id = session_id or uuid.uuid4().hex[:8]
        
        self._buffer = bytearray()
        self.finalized = False
        self.frame_count = 0
        
        logger.info(f"Audio session {self.session_id} opened: {sample_rate}Hz, "
                    f"{channels} channels, {bits_per_sample}-bit")
    
    def append(self, chunk: bytes) -> None:
        """Append a binary frame to the end of the buffer.
        
        Raises:
            SessionClosed: If the session has already been finalized
        """
        if self.finalized:
            raise SessionClosed(
                f"Session {self.session_id} is finalized; dropped {len(chunk)} bytes"
            )
        
        self._buffer.extend(chunk)
        self.frame_count += 1
        logger.debug(f"Received PCM data, buffer size: {len(self._buffer)}")
    
    def size(self) -> int:
        """Current buffer length in bytes."""
        return len(self._buffer)
    
    def finalize(self) -> bytes:
        """Seal the session and hand off the accumulated bytes.
        
        Returns:
            Everything appended so far, in arrival order
            
        Raises:
            SessionClosed: If called a second time
        """
        if self.finalized:
            raise SessionClosed(f"Session {self.session_id} was already finalized")
        
        self.finalized = True
        logger.info(f"Audio session {self.session_id} finalized: "
                    f"{self.frame_count} frames, {len(self._buffer)} bytes")
        return bytes(self._buffer)
    
    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.channels * self.bits_per_sample // 8
    
    @property
    def duration_seconds(self) -> float:
        if not self.byte_rate:
            return 0.0
        return len(self._buffer) / self.byte_rate
    
    def get_session_stats(self) -> Dict[str, Any]:
        """Get session statistics."""
        return {
            "session_id": self.session_id,
            "created_at": self.created_at.isoformat(),
            "frame_count": self.frame_count,
            "total_bytes": len(self._buffer),
            "duration_seconds": self.duration_seconds,
            "finalized": self.finalized,
        }
