"""
Tests for batch rendering.
"""

import threading
import time

from bitvox.engine import MockEngine
from bitvox.runtime import SyllableSynthesizer, render_batch


class TestRenderBatch:
    """Tests for ordered batch rendering."""
    
    def test_results_in_input_order(self, synth, make_syllable):
        syllables = [make_syllable(t) for t in ("SA", "TUR", "DAY")]
        batch = render_batch(synth, syllables)
        assert [r.syllable_id for r in batch] == [s.id for s in syllables]
        assert [len(r) for r in batch] == [400, 600, 600]
        assert len(batch) == 3
    
    def test_failures_do_not_abort(self, make_syllable):
        synth = SyllableSynthesizer(MockEngine(fail_texts={"TUR"}, raise_texts={"DAY"}))
        syllables = [make_syllable(t) for t in ("SA", "TUR", "DAY", "NA")]
        batch = render_batch(synth, syllables)
        assert batch.success_count == 2
        assert batch.failure_count == 2
        assert batch.failed_ids == [syllables[1].id, syllables[2].id]
    
    def test_snapshot(self, synth, make_syllable):
        syllables = [make_syllable("SA")]
        batch = render_batch(synth, syllables)
        syllables.append(make_syllable("TUR"))
        assert len(batch.syllables) == 1
    
    def test_empty(self, synth):
        batch = render_batch(synth, [])
        assert batch.results == ()
        assert batch.failed_ids == []
    
    def test_progress(self, synth, make_syllable):
        calls = []
        render_batch(synth, [make_syllable("SA"), make_syllable("NA")], on_progress=lambda d, t: calls.append((d, t)))
        assert calls == [(1, 2), (2, 2)]


class SlowFirstEngine(MockEngine):
    """Mock whose first syllable finishes last."""
    
    def render(self, request):
        if request.text == "SLOW":
            time.sleep(0.05)
        return super().render(request)


class TestParallelBatch:
    """Tests for thread-pool rendering."""
    
    def test_order_kept_when_completion_order_differs(self, make_syllable):
        synth = SyllableSynthesizer(SlowFirstEngine())
        syllables = [make_syllable(t) for t in ("SLOW", "A", "BE", "SEE")]
        batch = render_batch(synth, syllables, max_workers=4)
        assert [r.syllable_id for r in batch] == [s.id for s in syllables]
        assert [len(r) for r in batch] == [800, 200, 400, 600]
    
    def test_matches_sequential(self, make_syllable):
        engine = MockEngine(fail_texts={"BE"})
        synth = SyllableSynthesizer(engine)
        syllables = [make_syllable(t) for t in ("SA", "BE", "TUR", "DAY", "NA")]
        sequential = render_batch(synth, syllables)
        parallel = render_batch(synth, syllables, max_workers=3)
        assert [len(r) for r in sequential] == [len(r) for r in parallel]
        assert sequential.failed_ids == parallel.failed_ids
    
    def test_progress_counts_up(self, synth, make_syllable):
        lock = threading.Lock()
        calls = []
        
        def on_progress(done, total):
            with lock:
                calls.append(done)
        
        render_batch(synth, [make_syllable(t) for t in "ABCDE"], max_workers=2, on_progress=on_progress)
        assert sorted(calls) == [1, 2, 3, 4, 5]
