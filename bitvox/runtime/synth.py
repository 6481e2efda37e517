"""
Syllable Synthesis - One Syllable in, one RenderResult out.

This is the failure boundary of the pipeline. Whatever the engine does
(return a failure marker, raise on malformed input, return garbage),
the caller gets a RenderResult value. Nothing raises past render().

Engine output is upsampled from the engine's native rate to the target
rate by sample duplication.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Union

import numpy as np

from bitvox.engine.base import EngineFailure, EngineRequest, SpeechEngine
from bitvox.errors import EngineError
from bitvox.formats.sample_rate import duplication_factor, upsample_duplicate
from bitvox.runtime.events import EventKind, EventListener, RenderEvent, emit
from bitvox.syllables import TARGET_SAMPLE_RATE, Syllable

logger = logging.getLogger(__name__)


def _readonly(samples: np.ndarray) -> np.ndarray:
    samples = np.asarray(samples, dtype=np.float32)
    samples.flags.writeable = False
    return samples


@dataclass(frozen=True, eq=False)
class RenderSuccess:
    """Rendered samples for one syllable, at the target rate (read-only)."""
    syllable_id: str
    samples: np.ndarray = field(repr=False)
    
    def __post_init__(self):
        object.__setattr__(self, "samples", _readonly(self.samples))
    
    @property
    def ok(self) -> bool:
        return True
    
    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class RenderFailure:
    """A syllable that could not be rendered. Contributes silence."""
    syllable_id: str
    reason: str
    
    @property
    def ok(self) -> bool:
        return False
    
    @property
    def samples(self) -> np.ndarray:
        return _readonly(np.zeros(0, dtype=np.float32))
    
    def __len__(self) -> int:
        return 0


RenderResult = Union[RenderSuccess, RenderFailure]


def to_request(syllable: Syllable) -> EngineRequest:
    """Lower a Syllable to the engine's request shape."""
    return EngineRequest(
        text=syllable.text,
        phonetic=syllable.phonetic,
        pitch=syllable.pitch,
        speed=syllable.speed,
        mouth=syllable.mouth,
        throat=syllable.throat,
    )


class SyllableSynthesizer:
    """Render Syllables through an engine and normalize to the target rate.
    
    Example:
        synth = SyllableSynthesizer(FormantEngine())
        result = synth.render(syllable)
        if result.ok:
            play(result.samples)
    """
    
    def __init__(
        self,
        engine: SpeechEngine,
        *,
        target_rate: int = TARGET_SAMPLE_RATE,
        listeners: Iterable[EventListener] = (),
    ):
        """Initialize the synthesizer.
        
        Args:
            engine: Speech engine to render with
            target_rate: Output sample rate (a whole multiple of the engine's)
            listeners: Receive render_started/complete/failed events
        
        Raises:
            EngineError: If the engine's native rate cannot be duplicated
                up to target_rate
        """
        self._engine = engine
        self._target_rate = target_rate
        self._listeners = list(listeners)
        try:
            self._factor = duplication_factor(engine.sample_rate, target_rate)
        except ValueError as e:
            raise EngineError(str(e), details={
                "engine": engine.name,
                "native_rate": engine.sample_rate,
                "target_rate": target_rate,
            }) from e
    
    @property
    def engine(self) -> SpeechEngine:
        return self._engine
    
    @property
    def target_rate(self) -> int:
        return self._target_rate
    
    @property
    def factor(self) -> int:
        """Upsampling factor (2 for 22050 -> 44100)."""
        return self._factor
    
    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)
    
    def render(self, syllable: Syllable, index: int | None = None) -> RenderResult:
        """Render one syllable. Never raises for engine problems.
        
        Args:
            syllable: Resolved syllable
            index: Position in the caller's snapshot (for events only)
        
        Returns:
            RenderSuccess with target-rate samples, or RenderFailure
        """
        emit(self._listeners, RenderEvent(EventKind.RENDER_STARTED, syllable.id, index))
        
        result = self._render(syllable)
        
        if result.ok:
            emit(self._listeners, RenderEvent(
                EventKind.RENDER_COMPLETE, syllable.id, index,
                data={"samples": len(result)},
            ))
        else:
            logger.warning("Render failed for %r (%s): %s", syllable.text, syllable.id, result.reason)
            emit(self._listeners, RenderEvent(
                EventKind.RENDER_FAILED, syllable.id, index,
                data={"reason": result.reason},
            ))
        return result
    
    def _render(self, syllable: Syllable) -> RenderResult:
        try:
            output = self._engine.render(to_request(syllable))
            if isinstance(output, EngineFailure):
                return RenderFailure(syllable.id, output.reason)
            
            native = np.asarray(output, dtype=np.float32)
            if native.ndim != 1:
                return RenderFailure(syllable.id, f"Engine returned shape {native.shape}, expected mono")
            if not np.all(np.isfinite(native)):
                return RenderFailure(syllable.id, "Engine returned non-finite samples")
            
            return RenderSuccess(syllable.id, upsample_duplicate(native, self._factor))
        
        except Exception as e:
            logger.debug("Engine raised on %r", syllable.text, exc_info=True)
            return RenderFailure(syllable.id, f"{type(e).__name__}: {e}")
