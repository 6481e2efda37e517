"""
Formant Backend - Lo-fi dual-formant speech synthesis.

A small, deterministic synthesizer in the spirit of 8-bit speech chips.
Runs at 22050 Hz. Each phoneme is rendered on its own and concatenated:

    voiced     sawtooth at (22050 / pitch) Hz -> two band-pass resonators
               F1 (scaled by mouth / 128) and F2 (scaled by throat / 128)
    sibilant   seeded white noise -> 2 kHz high-pass
    pause      silence

Every phoneme gets a 10 ms attack and an exponential decay. Durations
scale with speed / 72 (larger = slower, as in classic SAM).
"""

from __future__ import annotations

import logging
import math
import zlib

import numpy as np
import scipy.signal as sig

from bitvox.engine.base import BaseSpeechEngine, EngineFailure, EngineRequest, PhonemeOutput, RenderOutput
from bitvox.engine.phonemes import PAUSES, VOWEL_CODES, parse_phonemes
from bitvox.errors import PhonemeSyntaxError

logger = logging.getLogger(__name__)


NATIVE_RATE = 22050

# F1/F2 centre frequencies (Hz) - approximate, tuned for 8-bit character
FORMANT_TABLE: dict[str, tuple[float, float]] = {
    "AA": (730, 1090),   # father
    "AE": (660, 1720),   # cat
    "AH": (640, 1190),   # cut
    "AO": (570, 840),    # dog
    "AW": (730, 1090),   # out (starts as AA)
    "AY": (660, 1720),   # bite (starts as AE)
    "AX": (500, 1500),   # about
    "EH": (530, 1840),   # pet
    "ER": (490, 1350),   # fur
    "EY": (530, 1840),   # plate (starts as EH)
    "IH": (390, 1990),   # bit
    "IX": (420, 1900),   # roses
    "IY": (270, 2290),   # feet
    "OH": (570, 840),
    "OW": (570, 840),    # go
    "OY": (570, 840),    # toy
    "UH": (440, 1020),   # book
    "UW": (300, 870),    # boot
    "UX": (320, 1100),   # loot
    "RX": (490, 1350),
    "LX": (400, 1150),
    "WX": (300, 870),
    "YX": (270, 2290),
}
DEFAULT_FORMANTS = (500.0, 1500.0)

SIBILANTS = frozenset({"S", "SH", "F", "TH", "T", "K", "P", "/H", "/X", "CH", "KX"})

# Letter-by-letter grapheme conversion
LETTER_TO_PHONEME = {
    "A": "AE", "B": "B", "C": "K", "D": "D", "E": "EH",
    "F": "F", "G": "G", "H": "/H", "I": "IH", "J": "J",
    "K": "K", "L": "L", "M": "M", "N": "N", "O": "AA",
    "P": "P", "Q": "K", "R": "R", "S": "S", "T": "T",
    "U": "AH", "V": "V", "W": "UW", "X": "S", "Y": "Y", "Z": "Z",
}

# Seconds at the stock speed (72)
VOWEL_DURATION = 0.12
CONSONANT_DURATION = 0.07
SIBILANT_DURATION = 0.06
PAUSE_DURATION = 0.10
STOCK_SPEED = 72

ATTACK_SECONDS = 0.01
VOICED_PEAK = 0.3
SIBILANT_PEAK = 0.1
DECAY_FLOOR = 0.001
OUTPUT_PEAK = 0.8

FORMANT1_Q = 5.0
FORMANT2_Q = 8.0
HIGHPASS_CUTOFF = 2000.0
HIGHPASS_Q = 1.0 / math.sqrt(2.0)
MIN_FORMANT_HZ = 50.0
NYQUIST_SAFETY = 0.45


def _bandpass_coeff(f0: float, q: float, sr: int) -> tuple[float, float, float, float, float]:
    """RBJ band-pass coefficients (constant peak gain)."""
    w0 = 2.0 * math.pi * f0 / sr
    alpha = math.sin(w0) / (2.0 * q)
    a0 = 1.0 + alpha
    return (alpha / a0, 0.0, -alpha / a0, -2.0 * math.cos(w0) / a0, (1.0 - alpha) / a0)


def _highpass_coeff(cutoff: float, q: float, sr: int) -> tuple[float, float, float, float, float]:
    """RBJ high-pass coefficients."""
    w0 = 2.0 * math.pi * cutoff / sr
    alpha = math.sin(w0) / (2.0 * q)
    cos_w0 = math.cos(w0)
    a0 = 1.0 + alpha
    return (
        (1.0 + cos_w0) * 0.5 / a0,
        -(1.0 + cos_w0) / a0,
        (1.0 + cos_w0) * 0.5 / a0,
        -2.0 * cos_w0 / a0,
        (1.0 - alpha) / a0,
    )


def _biquad(x: np.ndarray, b0: float, b1: float, b2: float, a1: float, a2: float) -> np.ndarray:
    """Second-order IIR section, a0 normalised to 1."""
    return sig.lfilter([b0, b1, b2], [1.0, a1, a2], x)


def _envelope(n: int, peak: float, sr: int) -> np.ndarray:
    """Linear attack to peak, exponential decay to DECAY_FLOOR at the end."""
    attack = min(n, max(1, int(ATTACK_SECONDS * sr)))
    env = np.empty(n, dtype=np.float64)
    env[:attack] = np.linspace(0.0, peak, attack, endpoint=False)
    decay = n - attack
    if decay > 0:
        env[attack:] = peak * (DECAY_FLOOR / peak) ** (np.arange(decay) / max(decay - 1, 1))
    return env


def _phoneme_duration(code: str) -> float:
    if code in PAUSES:
        return PAUSE_DURATION
    if code in SIBILANTS:
        return SIBILANT_DURATION
    if code in VOWEL_CODES:
        return VOWEL_DURATION
    return CONSONANT_DURATION


class FormantEngine(BaseSpeechEngine):
    """Deterministic dual-formant engine.
    
    Example:
        engine = FormantEngine()
        out = engine.render(EngineRequest("SA", False, 64, 72, 128, 128))
        if isinstance(out, EngineFailure):
            print(out.reason)
    """
    
    def __init__(self, sample_rate: int = NATIVE_RATE):
        self._sample_rate = sample_rate
    
    @property
    def name(self) -> str:
        return "formant"
    
    @property
    def sample_rate(self) -> int:
        return self._sample_rate
    
    def convert_to_phonemes(self, text: str) -> PhonemeOutput:
        """Letter-by-letter conversion to phoneme notation.
        
        Whitespace and apostrophes are dropped, pause punctuation is kept,
        anything else cannot be pronounced.
        """
        codes = []
        for ch in text.upper():
            if ch in LETTER_TO_PHONEME:
                codes.append(LETTER_TO_PHONEME[ch])
            elif ch in PAUSES:
                codes.append(ch)
            elif ch.isspace() or ch == "'":
                continue
            else:
                return EngineFailure(f"Cannot pronounce {ch!r}")
        if not codes:
            return EngineFailure("Nothing to pronounce")
        return "".join(codes)
    
    def render(self, request: EngineRequest) -> RenderOutput:
        """Render a request to native-rate float32 samples."""
        notation = request.text
        if not request.phonetic:
            converted = self.convert_to_phonemes(request.text)
            if isinstance(converted, EngineFailure):
                return converted
            notation = converted
        
        try:
            codes = parse_phonemes(notation)
        except PhonemeSyntaxError as e:
            return EngineFailure(e.message)
        
        if not codes:
            return EngineFailure("Nothing to render")
        
        rng = np.random.default_rng(self._seed(request))
        pieces = [self._render_phoneme(code, request, rng) for code in codes]
        audio = np.concatenate(pieces)
        logger.debug("Rendered %d phonemes into %d samples", len(codes), len(audio))
        
        peak = float(np.max(np.abs(audio))) if len(audio) else 0.0
        if peak > 0:
            audio = audio * (OUTPUT_PEAK / peak)
        
        return audio.astype(np.float32)
    
    def _seed(self, request: EngineRequest) -> int:
        key = (
            f"{request.text}|{int(request.phonetic)}|{request.pitch}|"
            f"{request.speed}|{request.mouth}|{request.throat}"
        )
        return zlib.crc32(key.encode("utf-8"))
    
    def _render_phoneme(self, code: str, request: EngineRequest, rng: np.random.Generator) -> np.ndarray:
        sr = self._sample_rate
        duration = _phoneme_duration(code) * request.speed / STOCK_SPEED
        n = max(1, int(duration * sr))
        
        if code in PAUSES:
            return np.zeros(n, dtype=np.float64)
        
        if code in SIBILANTS:
            noise = rng.uniform(-1.0, 1.0, n)
            filtered = _biquad(noise, *_highpass_coeff(HIGHPASS_CUTOFF, HIGHPASS_Q, sr))
            return filtered * _envelope(n, SIBILANT_PEAK, sr)
        
        f0 = sr / max(request.pitch, 1)
        phase = (np.arange(n) * f0 / sr) % 1.0
        source = 2.0 * phase - 1.0
        
        f1, f2 = FORMANT_TABLE.get(code, DEFAULT_FORMANTS)
        f1 = self._limit(f1 * request.mouth / 128.0)
        f2 = self._limit(f2 * request.throat / 128.0)
        
        voiced = (
            _biquad(source, *_bandpass_coeff(f1, FORMANT1_Q, sr))
            + _biquad(source, *_bandpass_coeff(f2, FORMANT2_Q, sr))
        )
        return voiced * _envelope(n, VOICED_PEAK, sr)
    
    def _limit(self, freq: float) -> float:
        return min(max(freq, MIN_FORMANT_HZ), self._sample_rate * NYQUIST_SAFETY)


__all__ = ["FormantEngine", "NATIVE_RATE", "FORMANT_TABLE", "LETTER_TO_PHONEME"]
