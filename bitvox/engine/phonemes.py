"""
Phoneme inventory and notation parsing.

Phoneme notation is a run of codes such as "/HEH4LOW". Two-character
codes are matched before one-character codes, digits 1-8 are stress
marks, whitespace is ignored. Anything else is a syntax error.
"""

from __future__ import annotations

from dataclasses import dataclass

from bitvox.errors import PhonemeSyntaxError


@dataclass(frozen=True)
class Phoneme:
    code: str
    category: str
    example: str


CATEGORIES = (
    "Vowels",
    "Diphthongs",
    "Semivowels",
    "Nasals",
    "Fricatives",
    "Affricates",
    "Stops",
    "Special",
)

_INVENTORY = [
    ("IY", "Vowels", "ee (feet)"),
    ("IH", "Vowels", "i (it)"),
    ("EH", "Vowels", "e (pet)"),
    ("AE", "Vowels", "a (cat)"),
    ("AA", "Vowels", "o (hot)"),
    ("AH", "Vowels", "u (but)"),
    ("AO", "Vowels", "aw (law)"),
    ("UH", "Vowels", "oo (put)"),
    ("AX", "Vowels", "a (about)"),
    ("IX", "Vowels", "i (roses)"),
    ("ER", "Vowels", "ur (bird)"),
    ("UX", "Vowels", "oo (loot)"),
    ("OH", "Vowels", "o (go)"),
    ("RX", "Vowels", "r-color"),
    ("LX", "Vowels", "l-color"),
    ("WX", "Vowels", "w-color"),
    ("YX", "Vowels", "y-color"),
    ("EY", "Diphthongs", "ay (say)"),
    ("AY", "Diphthongs", "i (my)"),
    ("OY", "Diphthongs", "oy (boy)"),
    ("AW", "Diphthongs", "ow (now)"),
    ("OW", "Diphthongs", "o (go)"),
    ("UW", "Diphthongs", "oo (blue)"),
    ("R", "Semivowels", "r (red)"),
    ("L", "Semivowels", "l (let)"),
    ("W", "Semivowels", "w (wet)"),
    ("Y", "Semivowels", "y (yes)"),
    ("M", "Nasals", "m (man)"),
    ("N", "Nasals", "n (no)"),
    ("NX", "Nasals", "ng (sing)"),
    ("S", "Fricatives", "s (sit)"),
    ("SH", "Fricatives", "sh (she)"),
    ("F", "Fricatives", "f (fun)"),
    ("TH", "Fricatives", "th (thin)"),
    ("/H", "Fricatives", "h (hat)"),
    ("/X", "Fricatives", "ch (loch)"),
    ("Z", "Fricatives", "z (zoo)"),
    ("ZH", "Fricatives", "zh (azure)"),
    ("V", "Fricatives", "v (vest)"),
    ("DH", "Fricatives", "th (the)"),
    ("CH", "Fricatives", "ch (church)"),
    ("J", "Affricates", "j (judge)"),
    ("B", "Stops", "b (bad)"),
    ("D", "Stops", "d (did)"),
    ("G", "Stops", "g (got)"),
    ("GX", "Stops", "gx"),
    ("P", "Stops", "p (put)"),
    ("T", "Stops", "t (top)"),
    ("K", "Stops", "k (kit)"),
    ("KX", "Stops", "kx"),
    ("DX", "Special", "r (rider)"),
    ("Q", "Special", "glottal stop"),
    ("UL", "Special", "l (settle)"),
    ("UM", "Special", "m (bottom)"),
    ("UN", "Special", "n (button)"),
    (".", "Special", "period"),
    ("?", "Special", "question"),
    (",", "Special", "comma"),
    ("-", "Special", "pause"),
]

PHONEMES: dict[str, Phoneme] = {code: Phoneme(code, cat, ex) for code, cat, ex in _INVENTORY}

PAUSES = frozenset({".", "?", ",", "-"})
VOWEL_CODES = frozenset(
    p.code for p in PHONEMES.values() if p.category in ("Vowels", "Diphthongs")
)

STRESS_MARKS = frozenset("12345678")


def by_category() -> dict[str, list[Phoneme]]:
    """Group the inventory by category, in display order."""
    grouped: dict[str, list[Phoneme]] = {c: [] for c in CATEGORIES}
    for phoneme in PHONEMES.values():
        grouped[phoneme.category].append(phoneme)
    return grouped


def parse_phonemes(text: str) -> list[str]:
    """Parse phoneme notation into a list of codes.
    
    Raises:
        PhonemeSyntaxError: on a symbol that starts no known code
    
    Example:
        parse_phonemes("/HEH4LOW") -> ["/H", "EH", "L", "OW"]
    """
    codes: list[str] = []
    i = 0
    text = text.upper()
    while i < len(text):
        ch = text[i]
        if ch.isspace() or ch in STRESS_MARKS:
            i += 1
            continue
        pair = text[i:i + 2]
        if len(pair) == 2 and pair in PHONEMES:
            codes.append(pair)
            i += 2
        elif ch in PHONEMES:
            codes.append(ch)
            i += 1
        else:
            raise PhonemeSyntaxError(text, i)
    return codes
