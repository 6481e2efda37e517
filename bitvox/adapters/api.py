"""
Public API Adapter - The kit studio.

KitStudio holds one editing session: an ordered syllable list, an
engine, and the voice defaults used for new syllables. Export and
preview each take a snapshot of the list when called, so edits made
while they run never shift an in-flight index.

Example:
    studio = KitStudio()
    studio.generate("saturday banana deluge")
    export = studio.export()
    path = studio.save(export)
    print(export.filename, export.failed_ids)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from bitvox.compiler import compile_text, resolve_syllable, update_syllable
from bitvox.engine import SpeechEngine, load_engine
from bitvox.formats import encode_wav
from bitvox.runtime import (
    AudioSink,
    BatchRender,
    EventListener,
    KitLayout,
    PreviewReport,
    PreviewScheduler,
    SyllableSynthesizer,
    assemble_kit,
    kit_filename,
    render_batch,
)
from bitvox.syllables import TARGET_SAMPLE_RATE, Syllable, VoiceDefaults

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Kit studio configuration."""
    output_dir: Path = field(default_factory=lambda: Path(os.environ.get("BITVOX_OUTPUT_DIR", "output")))
    engine: str = field(default_factory=lambda: os.environ.get("BITVOX_ENGINE", "auto"))
    defaults: VoiceDefaults = field(default_factory=VoiceDefaults)
    preview_gap_ms: int = 50
    max_workers: int = 1
    target_sample_rate: int = TARGET_SAMPLE_RATE
    
    def __post_init__(self):
        self.output_dir = Path(self.output_dir)
        if self.target_sample_rate != TARGET_SAMPLE_RATE:
            raise ValueError(f"Only {TARGET_SAMPLE_RATE} Hz kits are supported, got {self.target_sample_rate}")
        if self.preview_gap_ms < 0:
            raise ValueError(f"preview_gap_ms must be >= 0: {self.preview_gap_ms}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {self.max_workers}")


@dataclass(frozen=True, eq=False)
class KitExport:
    """An exported kit."""
    wav: bytes = field(repr=False)
    filename: str
    layout: KitLayout
    failed_ids: list[str]
    sample_rate: int
    
    @property
    def ok(self) -> bool:
        """True when every syllable rendered."""
        return not self.failed_ids


class KitStudio:
    """One editing session for a sample kit."""
    
    def __init__(
        self,
        config: Config | None = None,
        *,
        engine: SpeechEngine | None = None,
        listeners: Iterable[EventListener] = (),
    ):
        """Initialize the studio.
        
        Args:
            config: Optional configuration. Uses defaults if not provided.
            engine: Engine instance; loaded from config.engine if omitted
            listeners: Receive core events from rendering and preview
        """
        self.config = config or Config()
        self._engine = engine
        self._listeners = list(listeners)
        self._synth: SyllableSynthesizer | None = None
        self._syllables: list[Syllable] = []
        self._source_text = ""
    
    @property
    def engine(self) -> SpeechEngine:
        if self._engine is None:
            self._engine = load_engine(self.config.engine)
        return self._engine
    
    @property
    def synthesizer(self) -> SyllableSynthesizer:
        """Lazy-built synthesizer for the session's engine."""
        if self._synth is None:
            self._synth = SyllableSynthesizer(
                self.engine,
                target_rate=self.config.target_sample_rate,
                listeners=self._listeners,
            )
        return self._synth
    
    @property
    def syllables(self) -> tuple[Syllable, ...]:
        """Snapshot of the current syllable list."""
        return tuple(self._syllables)
    
    @property
    def source_text(self) -> str:
        return self._source_text
    
    # Editing
    
    def generate(self, text: str, *, to_phonemes: bool = False) -> tuple[Syllable, ...]:
        """Replace the syllable list with chunks of text.
        
        Blank text (no chunks) leaves the current list untouched.
        """
        syllables = compile_text(
            text,
            self.config.defaults,
            engine=self.engine if to_phonemes else None,
            to_phonemes=to_phonemes,
        )
        if syllables:
            self._syllables = syllables
            self._source_text = text
        return self.syllables
    
    def add(self, text: str, *, phonetic: bool = False, defaults: VoiceDefaults | None = None) -> Syllable:
        """Append a syllable."""
        syllable = resolve_syllable(text, defaults or self.config.defaults, phonetic=phonetic)
        self._syllables.append(syllable)
        return syllable
    
    def update(self, syllable_id: str, **changes) -> Syllable:
        """Edit a syllable in place (see compiler.update_syllable)."""
        i = self._index_of(syllable_id)
        self._syllables[i] = update_syllable(self._syllables[i], **changes)
        return self._syllables[i]
    
    def remove(self, syllable_id: str) -> Syllable:
        return self._syllables.pop(self._index_of(syllable_id))
    
    def clear(self) -> None:
        self._syllables.clear()
        self._source_text = ""
    
    def _index_of(self, syllable_id: str) -> int:
        for i, syllable in enumerate(self._syllables):
            if syllable.id == syllable_id:
                return i
        raise KeyError(f"No syllable with id {syllable_id!r}")
    
    # Rendering
    
    def render(self, syllables: Sequence[Syllable] | None = None) -> BatchRender:
        """Render a snapshot (the session list by default)."""
        snapshot = self.syllables if syllables is None else tuple(syllables)
        return render_batch(self.synthesizer, snapshot, max_workers=self.config.max_workers)
    
    def export(self, syllables: Sequence[Syllable] | None = None) -> KitExport:
        """Render, assemble and encode a kit.
        
        Always produces a valid WAV, even when every syllable fails.
        """
        batch = self.render(syllables)
        kit = assemble_kit(batch.syllables, batch.results)
        wav = encode_wav(kit.samples, self.synthesizer.target_rate)
        filename = kit_filename(self._source_text if syllables is None else "", kit.layout)
        
        logger.info(
            "Exported %s: %d syllables in %d slots of %d samples (%d failed)",
            filename, kit.layout.active_count, kit.layout.target_slice_count,
            kit.layout.slice_duration_samples, batch.failure_count,
        )
        return KitExport(
            wav=wav,
            filename=filename,
            layout=kit.layout,
            failed_ids=batch.failed_ids,
            sample_rate=self.synthesizer.target_rate,
        )
    
    def save(self, export: KitExport, path: Path | str | None = None) -> Path:
        """Write an export to disk (output_dir/filename by default)."""
        if path is None:
            self.config.output_dir.mkdir(parents=True, exist_ok=True)
            target = self.config.output_dir / export.filename
        else:
            target = Path(path)
            target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(export.wav)
        return target
    
    # Preview
    
    def preview_scheduler(self, sink: AudioSink, **kwargs) -> PreviewScheduler:
        """Build a scheduler wired to this session's synthesizer and listeners."""
        kwargs.setdefault("gap_seconds", self.config.preview_gap_ms / 1000.0)
        kwargs.setdefault("listeners", self._listeners)
        return PreviewScheduler(self.synthesizer, sink, **kwargs)
    
    def preview(self, sink: AudioSink, syllables: Sequence[Syllable] | None = None) -> PreviewReport:
        """Play the snapshot on the calling thread."""
        snapshot = self.syllables if syllables is None else tuple(syllables)
        return self.preview_scheduler(sink).run(snapshot)
