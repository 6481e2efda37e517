"""
Audio formats: duplication upsampling and canonical WAV encoding.
"""

from bitvox.formats.sample_rate import convert_sample_rate, duplication_factor, upsample_duplicate
from bitvox.formats.wav import HEADER_SIZE, WavHeader, encode_wav, float_to_pcm16, read_header

__all__ = [
    "upsample_duplicate",
    "duplication_factor",
    "convert_sample_rate",
    "encode_wav",
    "float_to_pcm16",
    "read_header",
    "WavHeader",
    "HEADER_SIZE",
]
