"""
Core events.

The runtime reports progress as events instead of keeping UI flags.
A presentation layer subscribes and derives whatever it shows
(highlighted pad, per-pad error marks, progress bars).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable


class EventKind(str, Enum):
    """What happened."""
    RENDER_STARTED = "render_started"
    RENDER_COMPLETE = "render_complete"
    RENDER_FAILED = "render_failed"
    PLAYBACK_STARTED = "playback_started"
    PREVIEW_STOPPED = "preview_stopped"
    PREVIEW_FINISHED = "preview_finished"


@dataclass(frozen=True)
class RenderEvent:
    """A single core event.
    
    Attributes:
        kind: Event type
        syllable_id: Syllable concerned (None for whole-run events)
        index: Position in the snapshot being processed
        data: Extra fields (sample counts, failure reason, ...)
    """
    kind: EventKind
    syllable_id: str | None = None
    index: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


EventListener = Callable[[RenderEvent], None]


def emit(listeners: Iterable[EventListener], event: RenderEvent) -> None:
    """Deliver an event to every listener, in order."""
    for listener in listeners:
        listener(event)


class EventRecorder:
    """Listener that keeps every event it receives.
    
    Example:
        recorder = EventRecorder()
        synth = SyllableSynthesizer(engine, listeners=[recorder])
        ...
        assert recorder.kinds() == [EventKind.RENDER_STARTED, EventKind.RENDER_COMPLETE]
    """
    
    def __init__(self):
        self.events: list[RenderEvent] = []
    
    def __call__(self, event: RenderEvent) -> None:
        self.events.append(event)
    
    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self.events]
    
    def of_kind(self, kind: EventKind) -> list[RenderEvent]:
        return [e for e in self.events if e.kind == kind]
    
    def clear(self) -> None:
        self.events.clear()
