"""
Sample rate conversion.

Kits are built at 44100 Hz from engine audio at a lower native rate.
Conversion is nearest-neighbour duplication: each native sample is
repeated `factor` times. This keeps the lo-fi timbre of the engine
instead of smoothing it, so no interpolation is applied.
"""

from __future__ import annotations

import numpy as np


def duplication_factor(from_rate: int, to_rate: int) -> int:
    """Integer upsampling factor between two rates.
    
    Raises:
        ValueError: If to_rate is not a whole multiple of from_rate
    """
    if from_rate <= 0 or to_rate <= 0:
        raise ValueError(f"Sample rates must be positive: {from_rate} -> {to_rate}")
    if to_rate % from_rate:
        raise ValueError(
            f"Cannot upsample {from_rate} Hz to {to_rate} Hz by duplication "
            "(target must be a whole multiple of the source)"
        )
    return to_rate // from_rate


def upsample_duplicate(audio: np.ndarray, factor: int = 2) -> np.ndarray:
    """Repeat every sample `factor` times.
    
    Output length is exactly len(audio) * factor and
    output[factor * i + k] == audio[i] for every k < factor.
    
    Example:
        upsample_duplicate(np.array([0.1, 0.2]))  # -> [0.1, 0.1, 0.2, 0.2]
    """
    if factor < 1:
        raise ValueError(f"Upsampling factor must be >= 1: {factor}")
    audio = np.asarray(audio, dtype=np.float32)
    if factor == 1:
        return audio.copy()
    return np.repeat(audio, factor)


def convert_sample_rate(audio: np.ndarray, from_rate: int, to_rate: int) -> np.ndarray:
    """Upsample native engine audio to a target rate by duplication."""
    return upsample_duplicate(audio, duplication_factor(from_rate, to_rate))
