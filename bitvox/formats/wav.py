"""
WAV encoding.

Canonical 44-byte-header PCM WAV, mono, 16-bit, little-endian:

    offset  size  field
    0       4     "RIFF"
    4       4     36 + data bytes
    8       4     "WAVE"
    12      4     "fmt "
    16      4     16 (fmt chunk size)
    20      2     1 (PCM)
    22      2     1 (channels)
    24      4     sample rate
    28      4     byte rate (sample rate * 2)
    32      2     block align (2)
    34      2     bits per sample (16)
    36      4     "data"
    40      4     data bytes
    44      ...   int16 samples

Float to int16 is asymmetric: after clamping to [-1, 1], negative
samples scale by 32768 and non-negative ones by 32767, truncating
toward zero. -1.0 -> -32768, 1.0 -> 32767.
"""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass

import numpy as np

from bitvox.errors import EncodingFault

HEADER_SIZE = 44
CHANNELS = 1
BIT_DEPTH = 16


@dataclass(frozen=True)
class WavHeader:
    """Parsed canonical WAV header."""
    riff_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bit_depth: int
    data_size: int
    
    @property
    def frame_count(self) -> int:
        return self.data_size // self.block_align if self.block_align else 0


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Convert float samples to little-endian int16 with asymmetric scaling.
    
    Raises:
        EncodingFault: On non-1-D or non-finite input
    """
    audio = np.asarray(samples)
    if audio.ndim != 1:
        raise EncodingFault(
            f"Expected mono 1-D samples, got shape {audio.shape}",
            details={"shape": audio.shape},
        )
    # float32 -> float64 is exact, so scaling matches double-precision math
    audio = audio.astype(np.float64)
    if not np.all(np.isfinite(audio)):
        bad = int(np.flatnonzero(~np.isfinite(audio))[0])
        raise EncodingFault(f"Non-finite sample at index {bad}", details={"index": bad})
    
    audio = np.clip(audio, -1.0, 1.0)
    scaled = np.where(audio < 0, audio * 32768.0, audio * 32767.0)
    # float -> int cast truncates toward zero
    return scaled.astype("<i2")


def encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    """Serialize mono float samples as a 16-bit PCM WAV byte string.
    
    Args:
        samples: Float samples, nominally in [-1, 1] (clamped)
        sample_rate: Sample rate in Hz
    
    Returns:
        Complete WAV file contents
    """
    if sample_rate <= 0:
        raise EncodingFault(f"Invalid sample rate: {sample_rate}", details={"sample_rate": sample_rate})
    
    pcm = float_to_pcm16(samples)
    
    block_align = CHANNELS * BIT_DEPTH // 8
    byte_rate = sample_rate * block_align
    data_size = len(pcm) * block_align
    
    buffer = io.BytesIO()
    
    # RIFF chunk
    buffer.write(b"RIFF")
    buffer.write(struct.pack("<I", 36 + data_size))
    buffer.write(b"WAVE")
    
    # fmt chunk
    buffer.write(b"fmt ")
    buffer.write(struct.pack("<I", 16))  # Chunk size
    buffer.write(struct.pack("<H", 1))   # PCM format
    buffer.write(struct.pack("<H", CHANNELS))
    buffer.write(struct.pack("<I", sample_rate))
    buffer.write(struct.pack("<I", byte_rate))
    buffer.write(struct.pack("<H", block_align))
    buffer.write(struct.pack("<H", BIT_DEPTH))
    
    # data chunk
    buffer.write(b"data")
    buffer.write(struct.pack("<I", data_size))
    buffer.write(pcm.tobytes())
    
    return buffer.getvalue()


def read_header(data: bytes) -> WavHeader:
    """Parse the canonical 44-byte header written by encode_wav().
    
    Raises:
        ValueError: If data is not a canonical PCM WAV
    """
    if len(data) < HEADER_SIZE:
        raise ValueError(f"WAV data too short: {len(data)} bytes")
    if data[0:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise ValueError("Not a RIFF/WAVE file")
    if data[12:16] != b"fmt " or data[36:40] != b"data":
        raise ValueError("Not a canonical 44-byte-header WAV")
    
    riff_size, = struct.unpack("<I", data[4:8])
    audio_format, channels, sample_rate, byte_rate, block_align, bit_depth = struct.unpack(
        "<HHIIHH", data[20:36]
    )
    data_size, = struct.unpack("<I", data[40:44])
    
    return WavHeader(
        riff_size=riff_size,
        audio_format=audio_format,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bit_depth=bit_depth,
        data_size=data_size,
    )
