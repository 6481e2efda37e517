"""
Runtime - rendering, kit assembly and preview.

The runtime decides what happens to engine audio: laid out on a slot
grid for export, or paced out to a sink for preview.
"""

from bitvox.runtime.batch import BatchRender, render_batch
from bitvox.runtime.events import EventKind, EventListener, EventRecorder, RenderEvent
from bitvox.runtime.kit import Kit, KitLayout, assemble_kit, compute_layout, kit_filename, target_slice_count
from bitvox.runtime.playback import AudioSink, RecordingSink, SounddeviceSink
from bitvox.runtime.preview import PreviewReport, PreviewScheduler, PreviewState
from bitvox.runtime.synth import (
    RenderFailure,
    RenderResult,
    RenderSuccess,
    SyllableSynthesizer,
)

__all__ = [
    # Synthesis
    "SyllableSynthesizer",
    "RenderResult",
    "RenderSuccess",
    "RenderFailure",
    # Batch
    "render_batch",
    "BatchRender",
    # Kit
    "Kit",
    "KitLayout",
    "assemble_kit",
    "compute_layout",
    "target_slice_count",
    "kit_filename",
    # Preview
    "PreviewScheduler",
    "PreviewState",
    "PreviewReport",
    "AudioSink",
    "SounddeviceSink",
    "RecordingSink",
    # Events
    "EventKind",
    "RenderEvent",
    "EventListener",
    "EventRecorder",
]
