"""
Voice Parameter Resolution.

Turns caller-supplied voice settings into the clamped integers a
Syllable carries. Musical pitch is converted to the engine's native
unit here, once, so nothing downstream ever sees a note name.

Pitch mapping (equal temperament, A4 = 440 Hz):
    f     = 440 * 2 ** ((note_index - 9 + (octave - 4) * 12) / 12)
    pitch = round_half_up(ENGINE_NATIVE_RATE / f)
"""

from __future__ import annotations

import dataclasses
import math

from bitvox.syllables import (
    ENGINE_NATIVE_RATE,
    MOUTH_RANGE,
    NOTES,
    OCTAVE_RANGE,
    PITCH_RANGE,
    SPEED_RANGE,
    THROAT_RANGE,
    MusicalPitch,
    PitchSource,
    RawPitch,
    Syllable,
    VoiceDefaults,
    new_syllable_id,
)


def clamp(value: int, bounds: tuple[int, int]) -> int:
    """Clamp an integer parameter into an inclusive range."""
    lo, hi = bounds
    return max(lo, min(hi, int(value)))


def round_half_up(x: float) -> int:
    """Round to nearest integer, halves away from negative infinity.
    
    Python's round() uses banker's rounding; pitch must not.
    """
    return int(math.floor(x + 0.5))


def note_to_frequency(note: str, octave: int) -> float:
    """Frequency in Hz of a note in the 12-tone chromatic scale."""
    if note not in NOTES:
        raise ValueError(f"Unknown note: {note!r}")
    note_index = NOTES.index(note)
    return 440.0 * 2 ** ((note_index - 9 + (octave - 4) * 12) / 12)


def note_to_pitch(note: str, octave: int, native_rate: int = ENGINE_NATIVE_RATE) -> int:
    """Convert note + octave to the engine's native pitch unit (unclamped)."""
    return round_half_up(native_rate / note_to_frequency(note, octave))


def resolve_pitch(source: PitchSource) -> tuple[int, PitchSource]:
    """Resolve a pitch source to a clamped native pitch.
    
    Returns:
        (pitch, normalized_source) - the source with its octave or raw
        value clamped, so re-resolving it gives the same pitch
    """
    if isinstance(source, MusicalPitch):
        octave = clamp(source.octave, OCTAVE_RANGE)
        normalized = MusicalPitch(source.note, octave)
        return clamp(note_to_pitch(source.note, octave), PITCH_RANGE), normalized
    
    if isinstance(source, RawPitch):
        value = clamp(source.value, PITCH_RANGE)
        return value, RawPitch(value)
    
    raise TypeError(f"Unsupported pitch source: {source!r}")


def resolve_syllable(
    text: str,
    defaults: VoiceDefaults | None = None,
    *,
    phonetic: bool = False,
    syllable_id: str | None = None,
) -> Syllable:
    """Build a fully resolved Syllable for one chunk of text.
    
    Args:
        text: Chunk text or phoneme notation
        defaults: Voice settings (stock voice if omitted)
        phonetic: Whether text is phoneme notation
        syllable_id: Keep an existing id (editing); fresh id otherwise
    
    Returns:
        Syllable with every parameter clamped to its engine range
    """
    defaults = defaults or VoiceDefaults()
    pitch, source = resolve_pitch(defaults.pitch)
    
    return Syllable(
        id=syllable_id or new_syllable_id(),
        text=text,
        phonetic=phonetic,
        pitch=pitch,
        pitch_source=source,
        speed=clamp(defaults.speed, SPEED_RANGE),
        mouth=clamp(defaults.mouth, MOUTH_RANGE),
        throat=clamp(defaults.throat, THROAT_RANGE),
    )


def voice_of(syllable: Syllable) -> VoiceDefaults:
    """Recover the voice settings a syllable was resolved from."""
    return VoiceDefaults(
        pitch=syllable.pitch_source or RawPitch(syllable.pitch),
        speed=syllable.speed,
        mouth=syllable.mouth,
        throat=syllable.throat,
    )


def update_syllable(syllable: Syllable, **changes) -> Syllable:
    """Return an edited copy of a syllable, re-resolved and re-clamped.
    
    Accepts text, phonetic, pitch (int or PitchSource), note, octave,
    speed, mouth and throat. Setting note or octave switches the syllable
    to musical pitch; setting an int pitch switches it to raw pitch.
    The id is preserved.
    
    Example:
        syl = update_syllable(syl, note="E", octave=3)
        syl = update_syllable(syl, speed=500)   # clamped to 200
    """
    unknown = set(changes) - {
        "text", "phonetic", "pitch", "note", "octave", "speed", "mouth", "throat",
    }
    if unknown:
        raise TypeError(f"Unknown syllable fields: {', '.join(sorted(unknown))}")
    
    voice = voice_of(syllable)
    pitch = voice.pitch
    
    if "pitch" in changes:
        value = changes["pitch"]
        pitch = value if isinstance(value, (RawPitch, MusicalPitch)) else RawPitch(int(value))
    
    if "note" in changes or "octave" in changes:
        base = pitch if isinstance(pitch, MusicalPitch) else MusicalPitch("C", 2)
        pitch = MusicalPitch(
            changes.get("note", base.note),
            int(changes.get("octave", base.octave)),
        )
    
    voice = dataclasses.replace(
        voice,
        pitch=pitch,
        speed=changes.get("speed", voice.speed),
        mouth=changes.get("mouth", voice.mouth),
        throat=changes.get("throat", voice.throat),
    )
    
    return resolve_syllable(
        changes.get("text", syllable.text),
        voice,
        phonetic=changes.get("phonetic", syllable.phonetic),
        syllable_id=syllable.id,
    )
