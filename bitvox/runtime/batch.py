"""
Batch Rendering - Render a snapshot of syllables in presentation order.

Each render is independent, so a batch may run on a thread pool.
Results always come back in input order; a failing syllable never
aborts the batch.

Usage:
    batch = render_batch(synth, syllables, max_workers=4)
    for syllable, result in zip(batch.syllables, batch.results):
        ...
    print(batch.failed_ids)
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from bitvox.runtime.synth import RenderResult, SyllableSynthesizer
from bitvox.syllables import Syllable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchRender:
    """Results of rendering a syllable snapshot."""
    syllables: tuple[Syllable, ...]
    results: tuple[RenderResult, ...]
    render_time: float
    
    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.ok)
    
    @property
    def failure_count(self) -> int:
        return len(self.results) - self.success_count
    
    @property
    def failed_ids(self) -> list[str]:
        """Ids of syllables that failed, in presentation order."""
        return [r.syllable_id for r in self.results if not r.ok]
    
    def __iter__(self) -> Iterator[RenderResult]:
        return iter(self.results)
    
    def __len__(self) -> int:
        return len(self.results)


def render_batch(
    synthesizer: SyllableSynthesizer,
    syllables: Sequence[Syllable],
    *,
    max_workers: int = 1,
    on_progress: Callable[[int, int], None] | None = None,
) -> BatchRender:
    """Render every syllable of a snapshot.
    
    Args:
        synthesizer: Synthesizer to render with
        syllables: Syllables in presentation order (snapshotted here)
        max_workers: Thread pool size; 1 renders sequentially
        on_progress: Callback(completed, total) after each render
    
    Returns:
        BatchRender with one result per syllable, same order
    """
    snapshot = tuple(syllables)
    total = len(snapshot)
    start = time.perf_counter()
    
    if max_workers > 1 and total > 1:
        results = _render_parallel(synthesizer, snapshot, max_workers, on_progress)
    else:
        results = []
        for i, syllable in enumerate(snapshot):
            results.append(synthesizer.render(syllable, index=i))
            if on_progress:
                on_progress(i + 1, total)
    
    render_time = time.perf_counter() - start
    batch = BatchRender(syllables=snapshot, results=tuple(results), render_time=render_time)
    
    logger.info(
        "Rendered %d syllables in %.2fs (%d failed)",
        total, render_time, batch.failure_count,
    )
    return batch


def _render_parallel(
    synthesizer: SyllableSynthesizer,
    snapshot: tuple[Syllable, ...],
    max_workers: int,
    on_progress: Callable[[int, int], None] | None,
) -> list[RenderResult]:
    results: list[RenderResult | None] = [None] * len(snapshot)
    completed = 0
    
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(synthesizer.render, syllable, i): i
            for i, syllable in enumerate(snapshot)
        }
        for future in concurrent.futures.as_completed(futures):
            results[futures[future]] = future.result()
            completed += 1
            if on_progress:
                on_progress(completed, len(snapshot))
    
    return results
