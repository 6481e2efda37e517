"""
Syllable records - the data model shared by compiler, engine and runtime.
"""

from bitvox.syllables.types import (
    ENGINE_NATIVE_RATE,
    MOUTH_RANGE,
    NOTES,
    OCTAVE_RANGE,
    PITCH_RANGE,
    SLOTS_PER_BANK,
    SPEED_RANGE,
    TARGET_SAMPLE_RATE,
    THROAT_RANGE,
    MusicalPitch,
    PitchSource,
    RawPitch,
    Syllable,
    VoiceDefaults,
    new_syllable_id,
)

__all__ = [
    "Syllable",
    "VoiceDefaults",
    "RawPitch",
    "MusicalPitch",
    "PitchSource",
    "new_syllable_id",
    "NOTES",
    "PITCH_RANGE",
    "SPEED_RANGE",
    "MOUTH_RANGE",
    "THROAT_RANGE",
    "OCTAVE_RANGE",
    "ENGINE_NATIVE_RATE",
    "TARGET_SAMPLE_RATE",
    "SLOTS_PER_BANK",
]
