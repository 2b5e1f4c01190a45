"""Audio accumulation and WAV container synthesis."""

from .session import AudioSession
from .wav import WavHeader, build_header, encode_wav

__all__ = [
    'AudioSession',
    'WavHeader',
    'build_header',
    'encode_wav'
]
