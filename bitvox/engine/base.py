"""
Engine Base - SpeechEngine protocol.

The engine is a capability boundary: bitvox never looks inside it.
Any synthesizer that honours this contract can render a kit.

ENGINE CONTRACT:
    Engines MUST:
        - Accept an EngineRequest (text, phonetic flag, four voice params)
        - Define their own native sample_rate (not normalized)
        - Return float32 samples in range [-1, 1], shape (samples,)
        - Return EngineFailure (not raise) for input they cannot render,
          e.g. invalid phoneme notation
        - Be deterministic: equal requests give equal samples
    
    Engines MUST NOT:
        - Import from compiler/
        - Resample to the target rate (the synthesizer does that)
        - Mutate previously returned buffers
    
    Raising is tolerated - the synthesizer treats any exception as a
    failure - but returning EngineFailure is the expected path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

import numpy as np


@dataclass(frozen=True)
class EngineRequest:
    """Everything an engine needs to render one syllable."""
    text: str
    phonetic: bool
    pitch: int
    speed: int
    mouth: int
    throat: int


@dataclass(frozen=True)
class EngineFailure:
    """Explicit 'could not render' marker returned by an engine."""
    reason: str


RenderOutput = Union[np.ndarray, EngineFailure]
PhonemeOutput = Union[str, EngineFailure]


@runtime_checkable
class SpeechEngine(Protocol):
    """Protocol for speech synthesis engines."""
    
    @property
    def name(self) -> str:
        """Engine identifier (e.g., 'formant', 'mock')."""
        ...
    
    @property
    def sample_rate(self) -> int:
        """Native output sample rate in Hz."""
        ...
    
    def render(self, request: EngineRequest) -> RenderOutput:
        """Render one request at the native rate, or return EngineFailure."""
        ...
    
    def convert_to_phonemes(self, text: str) -> PhonemeOutput:
        """Convert orthographic text to phoneme notation, or EngineFailure."""
        ...


class BaseSpeechEngine(ABC):
    """Base class for engines with common functionality."""
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Engine identifier."""
        ...
    
    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """Native output sample rate."""
        ...
    
    @abstractmethod
    def render(self, request: EngineRequest) -> RenderOutput:
        """Render a request."""
        ...
    
    def convert_to_phonemes(self, text: str) -> PhonemeOutput:
        """Grapheme-to-phoneme conversion - override where supported."""
        return EngineFailure(f"{self.name} engine has no phoneme conversion")
