"""
Text Processing - Syllable-sized chunking.

Splits words into chunks with a vowel-boundary heuristic. This is an
approximation of English syllables, not a phonetic analysis, and the
exact chunking is part of the kit's observable output.

    "SATURDAY" -> ["SA", "TUR", "DAY"]
    "BANANA"   -> ["BA", "NA", "NA"]
    "RHYTHM"   -> ["RHYTHM"]
    "PSST"     -> ["PSS", "T"]      (no vowel: fixed-width fallback)
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)


VOWELS = frozenset("AEIOUY")

# Leading non-vowels, a vowel run, then any consonants that are not
# followed by a vowel (those start the next chunk instead).
SYLLABLE_PATTERN = re.compile(r"[^aeiouy]*[aeiouy]+(?:[^aeiouy](?![aeiouy]))*", re.IGNORECASE)

# Chunk width when a word has no vowel at all
FALLBACK_WIDTH = 3

WORD_SEPARATOR = re.compile(r"\s+")


def syllabize(word: str) -> list[str]:
    """Split a single word into chunks.
    
    Matching is greedy and case-insensitive. Concatenating the result
    always reproduces the input word.
    
    Args:
        word: A single word (normally uppercased)
    
    Returns:
        Ordered non-empty chunks; empty list for an empty word
    """
    if not word:
        return []
    
    chunks = SYLLABLE_PATTERN.findall(word)
    if not chunks:
        logger.debug("No vowel in %r, using %d-character chunks", word, FALLBACK_WIDTH)
        return split_fixed(word, FALLBACK_WIDTH)
    
    return chunks


def split_fixed(word: str, width: int = FALLBACK_WIDTH) -> list[str]:
    """Split into fixed-width chunks; the last one may be shorter."""
    if width < 1:
        raise ValueError(f"Chunk width must be positive: {width}")
    return [word[i:i + width] for i in range(0, len(word), width)]


def is_degenerate(word: str) -> bool:
    """True when a word has no vowel and would use the fallback split."""
    return bool(word) and SYLLABLE_PATTERN.search(word) is None


def split_words(text: str) -> list[str]:
    """Uppercase text and split it on whitespace runs, dropping empty words."""
    return [w for w in WORD_SEPARATOR.split(text.upper()) if w]


def syllabize_text(text: str) -> list[str]:
    """Chunk every word of a text, in word order.
    
    Example:
        syllabize_text("saturday banana") -> ["SA", "TUR", "DAY", "BA", "NA", "NA"]
    """
    chunks: list[str] = []
    for word in split_words(text):
        chunks.extend(syllabize(word))
    return chunks
