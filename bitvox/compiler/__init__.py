"""
Compiler module - Turn text and voice settings into Syllables.

After compilation, presets and note names are gone - only clamped
integers remain.
"""

from bitvox.compiler.compile import compile_text
from bitvox.engine.phonemes import PHONEMES, CATEGORIES, Phoneme, by_category, parse_phonemes
from bitvox.compiler.presets import PRESETS, VoicePreset, build_defaults, get_preset
from bitvox.compiler.text import syllabize, syllabize_text, split_words, is_degenerate
from bitvox.compiler.voice import (
    clamp,
    note_to_frequency,
    note_to_pitch,
    resolve_pitch,
    resolve_syllable,
    round_half_up,
    update_syllable,
)

__all__ = [
    # Main entry point
    "compile_text",
    # Text
    "syllabize",
    "syllabize_text",
    "split_words",
    "is_degenerate",
    # Voice resolution
    "resolve_syllable",
    "resolve_pitch",
    "update_syllable",
    "note_to_frequency",
    "note_to_pitch",
    "round_half_up",
    "clamp",
    # Presets
    "PRESETS",
    "VoicePreset",
    "get_preset",
    "build_defaults",
    # Phonemes
    "PHONEMES",
    "CATEGORIES",
    "Phoneme",
    "by_category",
    "parse_phonemes",
]
