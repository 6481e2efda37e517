"""
Bitvox - Syllable kits for hardware samplers.

Architecture:
    Text → Syllables → Engine → 2x upsample → Slot grid → 16-bit WAV

Public API (stable):
    KitStudio       - Editing session. generate(), export(), preview_scheduler().
    KitExport       - Returned by .export(). WAV bytes, file name and layout.
    Config          - Studio configuration.
    validate_kit    - Check a kit file against sampler constraints.

Internals (for advanced users):
    bitvox.syllables    - Syllable, VoiceDefaults, RawPitch, MusicalPitch
    bitvox.compiler     - compile_text(), presets, phoneme inventory
    bitvox.engine       - SpeechEngine protocol, formant and mock engines
    bitvox.runtime      - SyllableSynthesizer, assemble_kit(), PreviewScheduler
    bitvox.formats      - encode_wav(), upsample_duplicate()

Example:
    from bitvox import KitStudio
    
    studio = KitStudio()
    studio.generate("saturday banana deluge")
    path = studio.save(studio.export())
"""

from bitvox.adapters import Config, KitExport, KitStudio, validate_kit
from bitvox.compiler import build_defaults, compile_text
from bitvox.errors import (
    BitvoxError,
    EncodingFault,
    EngineError,
    InvariantViolationError,
    PhonemeSyntaxError,
)
from bitvox.runtime import KitLayout, RenderFailure, RenderSuccess, assemble_kit
from bitvox.syllables import MusicalPitch, RawPitch, Syllable, VoiceDefaults

__version__ = "1.0.0"

__all__ = [
    # Public API
    "KitStudio",
    "KitExport",
    "Config",
    "validate_kit",
    # Building blocks
    "compile_text",
    "build_defaults",
    "assemble_kit",
    "KitLayout",
    "RenderSuccess",
    "RenderFailure",
    "Syllable",
    "VoiceDefaults",
    "RawPitch",
    "MusicalPitch",
    # Errors
    "BitvoxError",
    "InvariantViolationError",
    "EncodingFault",
    "PhonemeSyntaxError",
    "EngineError",
    # Version
    "__version__",
]
