"""
Voice presets.

The stock character voices of the formant engine, expressed as raw
pitch/speed/mouth/throat settings.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from bitvox.syllables import MusicalPitch, RawPitch, VoiceDefaults


@dataclass(frozen=True)
class VoicePreset:
    """A named voice with default parameters."""
    name: str
    pitch: int
    speed: int
    mouth: int
    throat: int
    description: str
    
    def to_defaults(self) -> VoiceDefaults:
        return VoiceDefaults(
            pitch=RawPitch(self.pitch),
            speed=self.speed,
            mouth=self.mouth,
            throat=self.throat,
        )


PRESETS: dict[str, VoicePreset] = {
    "sam": VoicePreset("sam", 64, 72, 128, 128, "Stock voice"),
    "elf": VoicePreset("elf", 72, 64, 110, 160, "Quick and bright"),
    "little-robot": VoicePreset("little-robot", 32, 92, 190, 190, "High, buzzy, slow"),
    "stuffy-guy": VoicePreset("stuffy-guy", 72, 82, 105, 110, "Nasal and muffled"),
    "little-old-lady": VoicePreset("little-old-lady", 32, 82, 145, 145, "High and wavering"),
    "extra-terrestrial": VoicePreset("extra-terrestrial", 64, 100, 200, 150, "Wide open throat"),
}


def get_preset(name: str) -> VoicePreset:
    """Look up a preset by name (case-insensitive)."""
    key = name.lower().replace("_", "-").replace(" ", "-")
    if key not in PRESETS:
        raise KeyError(f"Unknown preset: {name!r}. Available: {', '.join(PRESETS)}")
    return PRESETS[key]


def build_defaults(
    preset: str | None = None,
    *,
    pitch: int | None = None,
    note: str | None = None,
    octave: int | None = None,
    speed: int | None = None,
    mouth: int | None = None,
    throat: int | None = None,
) -> VoiceDefaults:
    """Combine a preset (or the generation defaults) with overrides.
    
    A note or octave override switches to musical pitch and wins over a
    raw pitch; a raw pitch override replaces the preset's pitch.
    """
    base = get_preset(preset).to_defaults() if preset else VoiceDefaults()
    
    pitch_source = base.pitch
    if pitch is not None:
        pitch_source = RawPitch(pitch)
    if note is not None or octave is not None:
        current = pitch_source if isinstance(pitch_source, MusicalPitch) else MusicalPitch("C", 2)
        pitch_source = MusicalPitch(
            note if note is not None else current.note,
            octave if octave is not None else current.octave,
        )
    
    return dataclasses.replace(
        base,
        pitch=pitch_source,
        speed=base.speed if speed is None else speed,
        mouth=base.mouth if mouth is None else mouth,
        throat=base.throat if throat is None else throat,
    )
