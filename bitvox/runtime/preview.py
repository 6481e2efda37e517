"""
Preview Scheduling - Play a syllable snapshot in order, cancellably.

State machine:
    IDLE --start--> PLAYING --(all played | stop)--> IDLE

Each iteration checks the cancel flag, renders syllable i, starts it on
the sink, and waits len(samples) / rate plus a fixed gap before moving
on. stop() returns the scheduler to IDLE at once, so a new preview can
start straight away. The stopped run finishes in the background without
playing anything further: audio already handed to the sink keeps
playing, only later syllables are skipped. A syllable that fails to
render plays nothing but still takes its gap, so timing and position
advance exactly as for a silent syllable.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Sequence

from bitvox.runtime.events import EventKind, EventListener, RenderEvent, emit
from bitvox.runtime.playback import AudioSink
from bitvox.runtime.synth import SyllableSynthesizer
from bitvox.syllables import Syllable

logger = logging.getLogger(__name__)

DEFAULT_GAP_SECONDS = 0.05


class PreviewState(Enum):
    IDLE = "idle"
    PLAYING = "playing"


@dataclass
class PreviewReport:
    """Outcome of one preview run."""
    played_ids: list[str] = field(default_factory=list)
    failed_ids: list[str] = field(default_factory=list)
    cancelled: bool = False
    elapsed: float = 0.0
    
    @property
    def visited(self) -> int:
        """Syllables processed (played or failed)."""
        return len(self.played_ids) + len(self.failed_ids)


class PreviewScheduler:
    """Sequential, cancellable preview of a syllable list.
    
    Example:
        scheduler = PreviewScheduler(synth, SounddeviceSink())
        scheduler.start(syllables)      # background thread
        ...
        scheduler.stop()                # skips the rest
        report = scheduler.join()
    
    run() does the same on the calling thread and returns the report.
    """
    
    def __init__(
        self,
        synthesizer: SyllableSynthesizer,
        sink: AudioSink,
        *,
        gap_seconds: float = DEFAULT_GAP_SECONDS,
        listeners: Iterable[EventListener] = (),
        sleep: Callable[[float], None] | None = None,
    ):
        """Initialize the scheduler.
        
        Args:
            synthesizer: Renders each syllable
            sink: Playback device
            gap_seconds: Fixed pause added after every syllable
            listeners: Receive playback/preview events
            sleep: Pacing function; defaults to a wait that wakes on stop()
        """
        self._synth = synthesizer
        self._sink = sink
        self._gap = gap_seconds
        self._listeners = list(listeners)
        self._sleep = sleep
        
        self._lock = threading.Lock()
        self._state = PreviewState.IDLE
        self._run: _Run | None = None
        self._current_index: int | None = None
        self._thread: threading.Thread | None = None
        self._report: PreviewReport | None = None
    
    @property
    def state(self) -> PreviewState:
        return self._state
    
    @property
    def is_playing(self) -> bool:
        return self._state == PreviewState.PLAYING
    
    @property
    def current_index(self) -> int | None:
        """Index of the syllable being played, None when idle."""
        return self._current_index
    
    @property
    def last_report(self) -> PreviewReport | None:
        return self._report
    
    def run(self, syllables: Sequence[Syllable]) -> PreviewReport:
        """Preview on the calling thread; returns when done or stopped.
        
        Raises:
            RuntimeError: If a preview is already playing
        """
        run = self._begin()
        return self._loop(run, tuple(syllables))
    
    def start(self, syllables: Sequence[Syllable]) -> None:
        """Preview on a background thread."""
        run = self._begin()
        snapshot = tuple(syllables)
        self._thread = threading.Thread(
            target=self._loop,
            args=(run, snapshot),
            daemon=True,
            name=f"bitvox-preview-{run.number}",
        )
        self._thread.start()
    
    def join(self, timeout: float | None = None) -> PreviewReport | None:
        """Wait for the latest background preview and return its report."""
        if self._thread is not None:
            self._thread.join(timeout)
            if not self._thread.is_alive():
                self._thread = None
        return self._report
    
    def stop(self) -> None:
        """Cancel the current run and return to IDLE immediately.
        
        An engine render already in progress is left to finish on its
        thread, but its audio is never played.
        """
        with self._lock:
            if self._state != PreviewState.PLAYING:
                return
            logger.debug("Preview stop requested at index %s", self._current_index)
            self._run.cancel.set()
            self._state = PreviewState.IDLE
            self._current_index = None
    
    def toggle(self, syllables: Sequence[Syllable]) -> bool:
        """Start if idle, stop if playing. Returns True if a preview was started."""
        if self.is_playing:
            self.stop()
            return False
        self.start(syllables)
        return True
    
    def _begin(self) -> _Run:
        with self._lock:
            if self._state == PreviewState.PLAYING:
                raise RuntimeError("Preview already playing")
            number = self._run.number + 1 if self._run else 1
            self._run = _Run(number)
            self._state = PreviewState.PLAYING
            self._report = None
            return self._run
    
    def _loop(self, run: _Run, snapshot: tuple[Syllable, ...]) -> PreviewReport:
        report = PreviewReport()
        start = time.perf_counter()
        rate = self._synth.target_rate
        sleep = self._sleep or run.cancel.wait
        
        try:
            for i, syllable in enumerate(snapshot):
                with self._lock:
                    if run.cancel.is_set():
                        report.cancelled = True
                        break
                    self._current_index = i
                
                result = self._synth.render(syllable, index=i)
                
                # stop() may have arrived during the render
                with self._lock:
                    if run.cancel.is_set():
                        report.cancelled = True
                        break
                    if result.ok:
                        self._sink.play(result.samples, rate)
                
                if result.ok:
                    report.played_ids.append(syllable.id)
                    emit(self._listeners, RenderEvent(
                        EventKind.PLAYBACK_STARTED, syllable.id, i,
                        data={"samples": len(result)},
                    ))
                else:
                    report.failed_ids.append(syllable.id)
                
                sleep(len(result) / rate + self._gap)
        finally:
            report.elapsed = time.perf_counter() - start
            with self._lock:
                # A newer run owns the scheduler once this one was stopped
                if self._run is run:
                    self._current_index = None
                    self._state = PreviewState.IDLE
                    self._report = report
        
        kind = EventKind.PREVIEW_STOPPED if report.cancelled else EventKind.PREVIEW_FINISHED
        emit(self._listeners, RenderEvent(kind, data={
            "played": len(report.played_ids),
            "failed": len(report.failed_ids),
        }))
        logger.info(
            "Preview %s after %d of %d syllables",
            "stopped" if report.cancelled else "finished", report.visited, len(snapshot),
        )
        return report


class _Run:
    """One start() or run() of a scheduler, with its own cancel flag."""
    
    def __init__(self, number: int):
        self.number = number
        self.cancel = threading.Event()
