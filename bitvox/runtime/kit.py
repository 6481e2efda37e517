"""
Kit Assembly - Lay rendered syllables out on a fixed slot grid.

Hardware samplers slice a kit into equal pads, in banks of 8. Every
syllable gets one slot; the slot length is the longest render; the slot
count is padded up to a multiple of 8 with silent slots.

    slot i < active_count   syllable i, left-aligned, zero tail
    slot i >= active_count  silence

A syllable that failed to render still owns its slot (silent), so pad
numbers never shift when one syllable breaks.

Example (render lengths 100, 150, 80):
    slice_duration_samples = 150
    target_slice_count     = 8
    buffer length          = 1200
    syllable 1             = offsets [150, 300)
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from bitvox.errors import InvariantViolationError
from bitvox.runtime.synth import RenderResult
from bitvox.syllables import SLOTS_PER_BANK, Syllable

logger = logging.getLogger(__name__)

MIN_SLICE_SAMPLES = 1
SLUG_MAX_LENGTH = 32


@dataclass(frozen=True)
class KitLayout:
    """Slot geometry of a kit.
    
    Attributes:
        slice_duration_samples: Samples per slot (longest render, >= 1)
        active_count: Number of syllables
        target_slice_count: Slot count, a multiple of 8 (>= 8)
    """
    slice_duration_samples: int
    active_count: int
    target_slice_count: int
    
    def __post_init__(self):
        if self.target_slice_count % SLOTS_PER_BANK != 0:
            raise InvariantViolationError(
                "slot-alignment",
                f"target_slice_count {self.target_slice_count} is not a multiple of {SLOTS_PER_BANK}",
            )
        if self.target_slice_count < max(self.active_count, 1):
            raise InvariantViolationError(
                "slot-capacity",
                f"{self.target_slice_count} slots cannot hold {self.active_count} syllables",
            )
        if self.slice_duration_samples < MIN_SLICE_SAMPLES:
            raise InvariantViolationError(
                "slice-length",
                f"slice_duration_samples must be >= {MIN_SLICE_SAMPLES}",
            )
    
    @property
    def padding_count(self) -> int:
        """Number of silent slots after the active ones."""
        return self.target_slice_count - self.active_count
    
    @property
    def total_samples(self) -> int:
        return self.target_slice_count * self.slice_duration_samples
    
    def slot_offset(self, slot: int) -> int:
        """First sample of a slot."""
        if not 0 <= slot < self.target_slice_count:
            raise IndexError(f"Slot {slot} out of range (0..{self.target_slice_count - 1})")
        return slot * self.slice_duration_samples
    
    def slice_seconds(self, sample_rate: int) -> float:
        return self.slice_duration_samples / sample_rate


def target_slice_count(active_count: int) -> int:
    """Next multiple of 8 at or above active_count, never below 8."""
    if active_count < 0:
        raise ValueError(f"active_count must be >= 0: {active_count}")
    return math.ceil(max(active_count, 1) / SLOTS_PER_BANK) * SLOTS_PER_BANK


def compute_layout(render_lengths: Sequence[int]) -> KitLayout:
    """Derive the kit layout from per-syllable render lengths.
    
    Failed renders count as length 0; they still occupy a slot.
    """
    return KitLayout(
        slice_duration_samples=max([*render_lengths, MIN_SLICE_SAMPLES]),
        active_count=len(render_lengths),
        target_slice_count=target_slice_count(len(render_lengths)),
    )


@dataclass(frozen=True, eq=False)
class Kit:
    """An assembled kit: layout plus the flat sample buffer."""
    layout: KitLayout
    samples: np.ndarray = field(repr=False)
    
    def slot(self, index: int) -> np.ndarray:
        """View of one slot's samples."""
        start = self.layout.slot_offset(index)
        return self.samples[start:start + self.layout.slice_duration_samples]


def assemble_kit(syllables: Sequence[Syllable], results: Sequence[RenderResult]) -> Kit:
    """Place rendered syllables at fixed-stride offsets in one buffer.
    
    Args:
        syllables: Syllables in presentation order
        results: One RenderResult per syllable, same order
    
    Returns:
        Kit whose buffer is target_slice_count * slice_duration_samples long
    
    Raises:
        InvariantViolationError: If results do not match syllables, or a
            render is longer than its slot
    """
    if len(results) != len(syllables):
        raise InvariantViolationError(
            "result-alignment",
            f"{len(results)} results for {len(syllables)} syllables",
        )
    for i, (syllable, result) in enumerate(zip(syllables, results)):
        if result.syllable_id != syllable.id:
            raise InvariantViolationError(
                "result-alignment",
                f"Result {i} belongs to {result.syllable_id!r}, expected {syllable.id!r}",
                details={"index": i},
            )
    
    layout = compute_layout([len(r) for r in results])
    buffer = np.zeros(layout.total_samples, dtype=np.float32)
    
    for i, result in enumerate(results):
        samples = result.samples
        if len(samples) > layout.slice_duration_samples:
            raise InvariantViolationError(
                "slot-overflow",
                f"Slot {i} holds {len(samples)} samples, slice is {layout.slice_duration_samples}",
                details={"index": i},
            )
        offset = layout.slot_offset(i)
        buffer[offset:offset + len(samples)] = samples
    
    logger.debug(
        "Assembled kit: %d active, %d slots, %d samples/slot",
        layout.active_count, layout.target_slice_count, layout.slice_duration_samples,
    )
    return Kit(layout=layout, samples=buffer)


def kit_filename(text: str, layout: KitLayout) -> str:
    """Deterministic export name from the source text and slot counts.
    
    Example:
        kit_filename("saturday deluge", layout) -> "bitvox_SATURDAY-DELUGE_5syl_8pad.wav"
    """
    words = re.findall(r"[A-Z0-9]+", text.upper())
    slug = "-".join(words)[:SLUG_MAX_LENGTH].strip("-") or "kit"
    return f"bitvox_{slug}_{layout.active_count}syl_{layout.target_slice_count}pad.wav"
