"""
Syllable Types - The records that flow through the kit pipeline.

A Syllable is the unit of work: one chunk of text (or phoneme notation)
plus fully resolved voice parameters. One Syllable renders to one slot
of the exported kit.

Pitch is a tagged variant, resolved exactly once when the Syllable is
created:
    RawPitch(value)            - the engine's native pitch unit
    MusicalPitch(note, octave) - equal-tempered note, converted to the
                                 native unit by the resolver

After resolution both the source (for display/editing) and the resolved
integer are carried. The synthesizer only ever reads the integer.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Union

# Engine-defined parameter ranges (inclusive)
PITCH_RANGE = (1, 255)
SPEED_RANGE = (40, 200)
MOUTH_RANGE = (0, 255)
THROAT_RANGE = (0, 255)
OCTAVE_RANGE = (1, 8)

NOTES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Sample rates
ENGINE_NATIVE_RATE = 22050
TARGET_SAMPLE_RATE = 44100

# Hardware sampler bank size; kits are padded to a multiple of this
SLOTS_PER_BANK = 8


@dataclass(frozen=True)
class RawPitch:
    """Pitch given directly in the engine's native unit."""
    value: int


@dataclass(frozen=True)
class MusicalPitch:
    """Pitch given as a note name and octave (A4 = 440 Hz)."""
    note: str
    octave: int
    
    def __post_init__(self):
        if self.note not in NOTES:
            raise ValueError(f"Unknown note: {self.note!r} (expected one of {', '.join(NOTES)})")


PitchSource = Union[RawPitch, MusicalPitch]


def new_syllable_id() -> str:
    """Opaque id, unique within an editing session."""
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class VoiceDefaults:
    """Voice parameters applied to every chunk of generated text.
    
    Values may be out of range here; the resolver clamps them.
    """
    pitch: PitchSource = field(default_factory=lambda: MusicalPitch("C", 2))
    speed: int = 72
    mouth: int = 128
    throat: int = 128


@dataclass(frozen=True)
class Syllable:
    """A text unit to render, with resolved voice parameters.
    
    Build these through compiler.resolve_syllable() rather than directly;
    the resolver clamps caller input and converts musical pitch. Direct
    construction with out-of-range values raises ValueError.
    
    Attributes:
        id: Opaque identifier, stable for the editing session
        text: Orthographic text or phoneme notation
        phonetic: True when text is already phoneme notation
        pitch: Resolved native pitch
        speed, mouth, throat: Resolved voice parameters
        pitch_source: Where pitch came from (raw or note/octave)
    """
    id: str
    text: str
    pitch: int
    speed: int
    mouth: int
    throat: int
    phonetic: bool = False
    pitch_source: PitchSource | None = None
    
    def __post_init__(self):
        for name, (lo, hi) in (
            ("pitch", PITCH_RANGE),
            ("speed", SPEED_RANGE),
            ("mouth", MOUTH_RANGE),
            ("throat", THROAT_RANGE),
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Syllable {name} must be an int, got {value!r}")
            if not lo <= value <= hi:
                raise ValueError(f"Syllable {name}={value} outside [{lo}, {hi}]")
    
    @property
    def note_label(self) -> str:
        """Human-readable pitch, e.g. 'C2' or 'p64'."""
        if isinstance(self.pitch_source, MusicalPitch):
            return f"{self.pitch_source.note}{self.pitch_source.octave}"
        return f"p{self.pitch}"
