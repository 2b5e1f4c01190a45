"""Recording service that turns finished audio sessions into WAV files."""

import logging
from typing import Optional

from ..audio.session import AudioSession
from ..audio.session_pub import SessionEventPublisher
from ..audio.wav import encode_wav
from ..errors import EncodingOverflow, StorageWriteFailure
from ..models.events import SessionEvent
from ..storage.file_manager import FileManager

logger = logging.getLogger(__name__)


class RecordingService:
    """Creates audio sessions and writes them to storage when their stream closes."""
    
    def __init__(self,
                 file_manager: FileManager,
                 publisher: Optional[SessionEventPublisher] = None,
                 sample_rate: int = 16000,
                 channels: int = 2,
                 bits_per_sample: int = 16):
        """Initialize recording service.
        
        Args:
            file_manager: Storage sink for encoded recordings
            publisher: Optional publisher notified of every session outcome
            sample_rate: Sample rate of the monitor stream
            channels: Channel count of the monitor stream
            bits_per_sample: Sample width of the monitor stream
        """
        self.file_manager = file_manager
        self.publisher = publisher
        self.sample_rate = sample_rate
        self.channels = channels
        self.bits_per_sample = bits_per_sample
        
        logger.info(f"RecordingService ready: {sample_rate}Hz, {channels} channels, "
                    f"{bits_per_sample}-bit")
    
    def create_session(self) -> AudioSession:
        """Open a new session with the configured stream parameters."""
        return AudioSession(
            sample_rate=self.sample_rate,
            channels=self.channels,
            bits_per_sample=self.bits_per_sample,
        )
    
    def finish_session(self, session: AudioSession) -> Optional[str]:
        """Finalize a session, encode it and write the WAV file.
        
        Args:
            session: Session whose stream has closed
            
        Returns:
            Path of the written file, or None if no audio was received
            
        Raises:
            EncodingOverflow: If the audio is too long for a WAV file
            StorageWriteFailure: If the file could not be written
        """
        payload = session.finalize()
        
        if not payload:
            logger.info(f"No audio received in session {session.session_id}, nothing to save")
            self._publish(SessionEvent(session_id=session.session_id, event_type="discarded"))
            return None
        
        try:
            wav_data = encode_wav(payload, session.sample_rate, session.channels,
                                  session.bits_per_sample)
            filename = self.file_manager.unique_filename(session.created_at)
            file_path = self.file_manager.save_audio_file(wav_data, filename)
        except (EncodingOverflow, StorageWriteFailure) as e:
            logger.critical(f"Recording of session {session.session_id} LOST "
                            f"({len(payload)} bytes of audio): {e}")
            self._publish(SessionEvent(
                session_id=session.session_id,
                event_type="failed",
                total_bytes=len(payload),
                error=str(e),
            ))
            raise
        
        logger.info(f"WAV file saved as {file_path} "
                    f"({session.duration_seconds:.1f}s of audio)")
        self._publish(SessionEvent(
            session_id=session.session_id,
            event_type="saved",
            total_bytes=len(payload),
            file_path=file_path,
            metadata=session.get_session_stats(),
        ))
        return file_path
    
    def _publish(self, event: SessionEvent) -> None:
        if self.publisher is not None:
            self.publisher.publish(event)
