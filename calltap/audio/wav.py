"""WAV (RIFF / linear PCM) container synthesis."""

import struct
from dataclasses import dataclass

from ..errors import EncodingOverflow

HEADER_SIZE = 44

# "RIFF" size field holds 36 + data length and must fit in a u32.
MAX_PAYLOAD_BYTES = 0xFFFFFFFF - 36

_HEADER_FORMAT = "<4sI4s4sIHHIIHH4sI"
_PCM_FORMAT_TAG = 1
_FMT_CHUNK_SIZE = 16


@dataclass(frozen=True)
class WavHeader:
    """Canonical 44-byte PCM WAV header."""
    data_size: int
    sample_rate: int
    channels: int
    bits_per_sample: int

    @property
    def block_align(self) -> int:
        return self.channels * self.bits_per_sample // 8

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.channels * self.bits_per_sample // 8

    @property
    def chunk_size(self) -> int:
        return 36 + self.data_size

    def to_bytes(self) -> bytes:
        """Pack the header as little-endian bytes.

        Raises:
            EncodingOverflow: If data_size does not fit the RIFF length fields
        """
        if self.data_size > MAX_PAYLOAD_BYTES:
            raise EncodingOverflow(self.data_size, MAX_PAYLOAD_BYTES)

        return struct.pack(
            _HEADER_FORMAT,
            b"RIFF",
            self.chunk_size,
            b"WAVE",
            b"fmt ",
            _FMT_CHUNK_SIZE,
            _PCM_FORMAT_TAG,
            self.channels,
            self.sample_rate,
            self.byte_rate,
            self.block_align,
            self.bits_per_sample,
            b"data",
            self.data_size,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "WavHeader":
        """Parse a canonical header from the first 44 bytes of a WAV file.

        Raises:
            ValueError: If data is too short or is not a canonical PCM header
        """
        if len(data) < HEADER_SIZE:
            raise ValueError(f"WAV header needs {HEADER_SIZE} bytes, got {len(data)}")

        (riff, _chunk_size, wave_id, fmt_id, fmt_size, format_tag, channels,
         sample_rate, _byte_rate, _block_align, bits_per_sample, data_id,
         data_size) = struct.unpack(_HEADER_FORMAT, bytes(data[:HEADER_SIZE]))

        if riff != b"RIFF" or wave_id != b"WAVE":
            raise ValueError("Not a RIFF/WAVE file")
        if fmt_id != b"fmt " or fmt_size != _FMT_CHUNK_SIZE or data_id != b"data":
            raise ValueError("Not a canonical 44-byte PCM header")
        if format_tag != _PCM_FORMAT_TAG:
            raise ValueError(f"Unsupported audio format tag: {format_tag}")

        return cls(
            data_size=data_size,
            sample_rate=sample_rate,
            channels=channels,
            bits_per_sample=bits_per_sample,
        )


def build_header(payload_length: int, sample_rate: int, channels: int,
                 bits_per_sample: int) -> bytes:
    """Build the 44-byte header for a payload of the given length."""
    return WavHeader(
        data_size=payload_length,
        sample_rate=sample_rate,
        channels=channels,
        bits_per_sample=bits_per_sample,
    ).to_bytes()


def encode_wav(payload: bytes, sample_rate: int, channels: int,
               bits_per_sample: int) -> bytes:
    """Wrap raw PCM bytes in a WAV container.

    Args:
        payload: Raw linear PCM audio
        sample_rate: Sample rate in Hz
        channels: Number of interleaved channels
        bits_per_sample: Sample width in bits

    Returns:
        Header followed by the payload, byte for byte

    Raises:
        EncodingOverflow: If the payload is too large for a WAV file
    """
    header = build_header(len(payload), sample_rate, channels, bits_per_sample)
    return header + bytes(payload)
