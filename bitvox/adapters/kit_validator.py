"""
Kit Validator - Check an exported kit against sampler constraints.

Validates:
- File format (WAV only)
- Channel count (mono required)
- Sample format (16-bit PCM)
- Sample rate (44100 Hz)
- Frame count divides evenly into the slice count

The slice count comes from the caller, else from the "<n>pad" part of
the file name, else one bank of 8.

Usage:
    bitvox validate-kit bitvox_SATURDAY_3syl_8pad.wav
    # OK bitvox_SATURDAY_3syl_8pad.wav: mono, 16-bit, 44100Hz, 8 x 2400 samples
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import soundfile as sf

from bitvox.syllables import SLOTS_PER_BANK, TARGET_SAMPLE_RATE

logger = logging.getLogger(__name__)

_PAD_SUFFIX = re.compile(r"_(\d+)pad", re.IGNORECASE)


@dataclass
class KitValidation:
    """Result of validating one kit file."""
    path: Path
    valid: bool
    issues: list[str] = field(default_factory=list)
    
    # Audio properties (if readable)
    channels: int = 0
    sample_rate: int = 0
    subtype: str = ""
    frames: int = 0
    slice_count: int = 0
    
    @property
    def slice_frames(self) -> int:
        """Frames per slot, or 0 when the kit does not divide evenly."""
        if self.slice_count < 1 or self.frames % self.slice_count:
            return 0
        return self.frames // self.slice_count


def slices_from_filename(path: Path | str) -> int | None:
    """Parse the slot count from an export file name, if present."""
    match = _PAD_SUFFIX.search(Path(path).stem)
    return int(match.group(1)) if match else None


def validate_kit(path: Path | str, expected_slices: int | None = None) -> KitValidation:
    """Validate a kit WAV file.
    
    Args:
        path: Path to the kit
        expected_slices: Slot count; parsed from the file name if omitted
    
    Returns:
        KitValidation with issues list
    """
    path = Path(path)
    if expected_slices is not None:
        slices = expected_slices
    else:
        slices = slices_from_filename(path) or SLOTS_PER_BANK
    result = KitValidation(path=path, valid=True, slice_count=slices)
    
    if path.suffix.lower() not in (".wav", ".wave"):
        result.valid = False
        result.issues.append(f"Invalid format: {path.suffix} (must be .wav)")
        return result
    
    try:
        info = sf.info(str(path))
    except (RuntimeError, OSError) as e:
        result.valid = False
        result.issues.append(f"Failed to read: {e}")
        return result
    
    result.channels = info.channels
    result.sample_rate = int(info.samplerate)
    result.subtype = info.subtype
    result.frames = info.frames
    
    if result.channels != 1:
        result.valid = False
        result.issues.append(f"{result.channels} channels - must be mono")
    
    if result.subtype != "PCM_16":
        result.valid = False
        result.issues.append(f"sample format {result.subtype} - must be PCM_16")
    
    if result.sample_rate != TARGET_SAMPLE_RATE:
        result.valid = False
        result.issues.append(f"sample rate {result.sample_rate}Hz - must be {TARGET_SAMPLE_RATE}Hz")
    
    if slices < 1:
        result.valid = False
        result.issues.append(f"slice count {slices} - must be positive")
    elif slices % SLOTS_PER_BANK:
        result.valid = False
        result.issues.append(f"slice count {slices} is not a multiple of {SLOTS_PER_BANK}")
    
    if slices >= 1 and (result.frames == 0 or result.frames % slices):
        result.valid = False
        result.issues.append(f"{result.frames} frames do not divide into {slices} slices")
    
    logger.debug("Validated %s: valid=%s issues=%d", path, result.valid, len(result.issues))
    return result
