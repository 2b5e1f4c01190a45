"""CallTap - record live call audio streams to WAV files."""

__version__ = "0.1.0"
