"""File management module for recorded call audio."""

import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Dict, Any, List

from ..errors import StorageWriteFailure


logger = logging.getLogger(__name__)


class FileManager:
    """Manages file storage and naming for call recordings."""
    
    def __init__(self, data_dir: str = "./data"):
        """Initialize file manager with data directory.
        
        Args:
            data_dir: Base directory for storing all data
        """
        self.data_dir = Path(data_dir)
        self.recordings_dir = self.data_dir / "recordings"
        self.logs_dir = self.data_dir / "logs"
        
        # Create directory structure
        self._ensure_directories()
        
        logger.info(f"FileManager initialized with data_dir: {self.data_dir}")
    
    def _ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        for directory in [self.data_dir, self.recordings_dir, self.logs_dir]:
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured directory exists: {directory}")
    
    def unique_filename(self, created_at: datetime) -> str:
        """Build a filesystem-safe recording name from a session start time.
        
        The timestamp is rendered in UTC as ISO 8601 with ':' and '.' replaced
        by '-', e.g. audio_2024-09-29T13-45-30-123Z.wav. A numeric suffix is
        added when a recording of that name already exists.
        
        Args:
            created_at: Session creation time (naive values are taken as UTC)
            
        Returns:
            Filename relative to the recordings directory
        """
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        utc = created_at.astimezone(timezone.utc)
        stamp = utc.strftime("%Y-%m-%dT%H-%M-%S") + f"-{utc.microsecond // 1000:03d}Z"
        
        filename = f"audio_{stamp}.wav"
        counter = 1
        while (self.recordings_dir / filename).exists():
            filename = f"audio_{stamp}_{counter}.wav"
            counter += 1
        
        return filename
    
    def save_audio_file(self, audio_data: bytes, filename: str) -> str:
        """Save encoded audio to the recordings directory and return its path.
        
        Args:
            audio_data: Complete WAV file bytes
            filename: Target filename
            
        Returns:
            Full path to saved audio file
            
        Raises:
            StorageWriteFailure: If the file could not be written
        """
        # Ensure .wav extension
        if not filename.endswith('.wav'):
            filename += '.wav'
        
        audio_file_path = self.recordings_dir / filename
        logger.info(f"Saving WAV file as {audio_file_path}...")
        
        try:
            with open(audio_file_path, 'wb') as f:
                f.write(audio_data)
        except OSError as e:
            raise StorageWriteFailure(
                f"Could not write {len(audio_data)} bytes to {audio_file_path}: {e}"
            ) from e
        
        logger.info(f"Audio file saved: {audio_file_path} ({len(audio_data)} bytes)")
        return str(audio_file_path)
    
    def list_recordings(self) -> List[str]:
        """List saved recording filenames, oldest first."""
        recordings = sorted(path.name for path in self.recordings_dir.glob("*.wav"))
        logger.debug(f"Found {len(recordings)} recordings")
        return recordings
    
    def get_storage_stats(self) -> Dict[str, Any]:
        """Get storage usage statistics.
        
        Returns:
            Dictionary with storage statistics
        """
        total_size = 0
        audio_files = 0
        
        for file_path in self.recordings_dir.glob("*.wav"):
            if file_path.is_file():
                total_size += file_path.stat().st_size
                audio_files += 1
        
        return {
            "total_size_bytes": total_size,
            "total_size_mb": round(total_size / (1024 * 1024), 2),
            "audio_files": audio_files,
            "data_directory": str(self.data_dir)
        }
