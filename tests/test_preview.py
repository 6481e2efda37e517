"""
Tests for preview scheduling.
"""

import threading

import numpy as np
import pytest

from bitvox.engine import MockEngine
from bitvox.engine.base import EngineRequest
from bitvox.runtime import (
    EventKind,
    EventRecorder,
    PreviewScheduler,
    PreviewState,
    RecordingSink,
    SyllableSynthesizer,
)


class BlockingEngine(MockEngine):
    """Mock engine whose render of "SLOW" waits until released."""
    
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.entered = threading.Event()
        self.release = threading.Event()
    
    def render(self, request: EngineRequest):
        if request.text == "SLOW":
            self.entered.set()
            self.release.wait(5)
        return super().render(request)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def preview_synth():
    return SyllableSynthesizer(MockEngine(fail_texts={"XQ"}))


class TestPreviewRun:
    """Tests for synchronous preview."""
    
    def test_plays_in_order_with_gaps(self, preview_synth, sink, make_syllable):
        sleeps = []
        scheduler = PreviewScheduler(preview_synth, sink, sleep=sleeps.append)
        syllables = [make_syllable(t) for t in ("SA", "TUR")]
        
        report = scheduler.run(syllables)
        
        assert report.played_ids == [s.id for s in syllables]
        assert not report.cancelled
        assert [len(p.samples) for p in sink.played] == [400, 600]
        assert all(p.sample_rate == 44100 for p in sink.played)
        assert sleeps == pytest.approx([400 / 44100 + 0.05, 600 / 44100 + 0.05])
    
    def test_failed_syllable_skipped_but_gapped(self, preview_synth, sink, make_syllable):
        sleeps = []
        scheduler = PreviewScheduler(preview_synth, sink, gap_seconds=0.1, sleep=sleeps.append)
        syllables = [make_syllable(t) for t in ("SA", "XQ", "NA")]
        
        report = scheduler.run(syllables)
        
        assert len(sink.played) == 2
        assert report.failed_ids == [syllables[1].id]
        assert report.visited == 3
        assert sleeps[1] == pytest.approx(0.1)
    
    def test_state_resets(self, preview_synth, sink, make_syllable):
        scheduler = PreviewScheduler(preview_synth, sink, sleep=lambda s: None)
        scheduler.run([make_syllable("SA")])
        assert scheduler.state == PreviewState.IDLE
        assert scheduler.current_index is None
        assert scheduler.last_report.played_ids
    
    def test_events(self, preview_synth, sink, make_syllable):
        recorder = EventRecorder()
        scheduler = PreviewScheduler(preview_synth, sink, listeners=[recorder], sleep=lambda s: None)
        syllables = [make_syllable(t) for t in ("SA", "XQ")]
        scheduler.run(syllables)
        
        assert recorder.kinds() == [EventKind.PLAYBACK_STARTED, EventKind.PREVIEW_FINISHED]
        assert recorder.events[0].syllable_id == syllables[0].id
        assert recorder.events[-1].data == {"played": 1, "failed": 1}
    
    def test_empty_list(self, preview_synth, sink):
        report = PreviewScheduler(preview_synth, sink, sleep=lambda s: None).run([])
        assert report.visited == 0
        assert not report.cancelled
    
    def test_snapshot(self, preview_synth, sink, make_syllable):
        syllables = [make_syllable("SA"), make_syllable("NA")]
        
        def sleep(seconds):
            syllables.clear()
        
        report = PreviewScheduler(preview_synth, sink, sleep=sleep).run(syllables)
        assert report.visited == 2


class TestPreviewStop:
    """Tests for cancellation."""
    
    def test_stop_skips_remaining(self, preview_synth, sink, make_syllable):
        recorder = EventRecorder()
        
        def sleep(seconds):
            scheduler.stop()
        
        scheduler = PreviewScheduler(preview_synth, sink, listeners=[recorder], sleep=sleep)
        syllables = [make_syllable(t) for t in ("SA", "TUR", "DAY")]
        
        report = scheduler.run(syllables)
        
        assert report.cancelled
        assert report.played_ids == [syllables[0].id]
        assert len(sink.played) == 1
        assert recorder.kinds()[-1] == EventKind.PREVIEW_STOPPED
    
    def test_stop_when_idle_is_noop(self, preview_synth, sink):
        scheduler = PreviewScheduler(preview_synth, sink)
        scheduler.stop()
        assert scheduler.state == PreviewState.IDLE
    
    def test_background_toggle(self, preview_synth, sink, make_syllable):
        gate = threading.Event()
        scheduler = PreviewScheduler(preview_synth, sink, sleep=lambda s: gate.wait(5))
        syllables = [make_syllable(t) for t in ("SA", "TUR", "DAY")]
        
        assert scheduler.toggle(syllables) is True
        assert scheduler.is_playing
        while not sink.played:
            threading.Event().wait(0.01)
        with pytest.raises(RuntimeError):
            scheduler.run(syllables)
        
        assert scheduler.toggle(syllables) is False
        assert scheduler.current_index is None
        gate.set()
        report = scheduler.join(timeout=5)
        
        assert report.cancelled
        assert report.visited < 3
        assert scheduler.state == PreviewState.IDLE
    
    def test_default_wait_wakes_on_stop(self, make_syllable, sink):
        synth = SyllableSynthesizer(MockEngine(lengths={"LONG": 22050 * 30}))
        scheduler = PreviewScheduler(synth, sink)
        scheduler.start([make_syllable("LONG"), make_syllable("SA")])
        
        while not sink.played:
            threading.Event().wait(0.01)
        scheduler.stop()
        report = scheduler.join(timeout=5)
        
        assert report is not None
        assert report.cancelled
        assert report.elapsed < 5
    
    def test_restart_after_finish(self, preview_synth, sink, make_syllable):
        scheduler = PreviewScheduler(preview_synth, sink, sleep=lambda s: None)
        scheduler.start([make_syllable("SA")])
        first = scheduler.join(timeout=5)
        scheduler.start([make_syllable("NA")])
        second = scheduler.join(timeout=5)
        assert first is not second
        assert len(sink.played) == 2
        np.testing.assert_array_equal(sink.played[0].samples, sink.played[1].samples)
    
    def test_stop_during_render_returns_to_idle(self, sink, make_syllable):
        engine = BlockingEngine()
        recorder = EventRecorder()
        scheduler = PreviewScheduler(
            SyllableSynthesizer(engine), sink, listeners=[recorder], sleep=lambda s: None,
        )
        old = [make_syllable(t) for t in ("SLOW", "SA", "TUR")]
        new = make_syllable("NA")
        
        scheduler.start(old)
        assert engine.entered.wait(5)
        scheduler.stop()
        
        assert scheduler.state == PreviewState.IDLE
        assert not scheduler.is_playing
        assert scheduler.current_index is None
        
        assert scheduler.toggle([new]) is True
        second = scheduler.join(timeout=5)
        assert second.played_ids == [new.id]
        
        engine.release.set()
        for _ in range(500):
            if EventKind.PREVIEW_STOPPED in recorder.kinds():
                break
            threading.Event().wait(0.01)
        
        assert EventKind.PREVIEW_STOPPED in recorder.kinds()
        assert [len(p.samples) for p in sink.played] == [400]
        assert scheduler.last_report is second
        assert scheduler.state == PreviewState.IDLE
