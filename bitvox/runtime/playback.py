"""
Audio sinks - where preview audio goes.

A sink starts playing a buffer and returns immediately; the preview
scheduler does its own pacing. stop() silences whatever is playing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

logger = logging.getLogger(__name__)


@runtime_checkable
class AudioSink(Protocol):
    """Protocol for playback devices."""
    
    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        """Start playing samples (non-blocking)."""
        ...
    
    def stop(self) -> None:
        """Stop any playback in progress."""
        ...


class SounddeviceSink:
    """Plays through the default output device via sounddevice.
    
    Requires the optional `sounddevice` package (bitvox[playback]).
    """
    
    def __init__(self, device: int | str | None = None):
        import sounddevice
        
        self._sd = sounddevice
        self._device = device
    
    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        if len(samples) == 0:
            return
        logger.debug("Playing %d samples at %d Hz", len(samples), sample_rate)
        self._sd.play(np.asarray(samples, dtype=np.float32), sample_rate, device=self._device)
    
    def stop(self) -> None:
        self._sd.stop()
    
    def wait(self) -> None:
        """Block until the current buffer has finished playing."""
        self._sd.wait()


@dataclass(frozen=True, eq=False)
class PlayedBuffer:
    samples: np.ndarray
    sample_rate: int


class RecordingSink:
    """Sink that records what it was asked to play. For tests and dry runs."""
    
    def __init__(self):
        self.played: list[PlayedBuffer] = []
        self.stop_count = 0
    
    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        self.played.append(PlayedBuffer(np.array(samples, dtype=np.float32), sample_rate))
    
    def stop(self) -> None:
        self.stop_count += 1
