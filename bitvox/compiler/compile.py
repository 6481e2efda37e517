"""
Compiler - Text to Syllable list.

Chunks text with the syllabizer and resolves every chunk against the
same voice defaults. Optionally converts each chunk to phoneme notation
through the engine before it becomes a Syllable.

Usage:
    syllables = compile_text("saturday deluge", build_defaults("elf"))
"""

from __future__ import annotations

import logging

from bitvox.compiler.text import syllabize_text
from bitvox.compiler.voice import resolve_syllable
from bitvox.engine.base import EngineFailure, SpeechEngine
from bitvox.syllables import Syllable, VoiceDefaults

logger = logging.getLogger(__name__)


def compile_text(
    text: str,
    defaults: VoiceDefaults | None = None,
    *,
    engine: SpeechEngine | None = None,
    to_phonemes: bool = False,
) -> list[Syllable]:
    """Compile text into an ordered list of resolved Syllables.
    
    Args:
        text: Arbitrary input text; split on whitespace and chunked
        defaults: Voice settings applied to every chunk
        engine: Engine used for phoneme conversion
        to_phonemes: Convert each chunk to phoneme notation first
    
    Returns:
        One Syllable per chunk, in text order (empty for blank text)
    """
    if to_phonemes and engine is None:
        raise ValueError("Phoneme conversion requires an engine")
    
    syllables = []
    for chunk in syllabize_text(text):
        chunk_text, phonetic = chunk, False
        
        if to_phonemes:
            converted = engine.convert_to_phonemes(chunk)
            if isinstance(converted, EngineFailure):
                logger.warning(
                    "Phoneme conversion failed for %r (%s); keeping text",
                    chunk, converted.reason,
                )
            else:
                chunk_text, phonetic = converted, True
        
        syllables.append(resolve_syllable(chunk_text, defaults, phonetic=phonetic))
    
    logger.debug("Compiled %r into %d syllables", text, len(syllables))
    return syllables
