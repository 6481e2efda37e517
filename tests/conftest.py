"""
Shared fixtures for bitvox tests.
"""

import pytest

from bitvox.adapters.api import Config, KitStudio
from bitvox.compiler import resolve_syllable
from bitvox.engine import MockEngine
from bitvox.runtime import EventRecorder, SyllableSynthesizer
from bitvox.syllables import RawPitch, VoiceDefaults


@pytest.fixture
def mock_engine():
    """Mock engine: 100 native samples per character, tone output."""
    return MockEngine()


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def synth(mock_engine, recorder):
    return SyllableSynthesizer(mock_engine, listeners=[recorder])


@pytest.fixture
def make_syllable():
    """Factory for resolved syllables with the stock voice."""
    def _make(text, **voice):
        defaults = VoiceDefaults(
            pitch=RawPitch(voice.pop("pitch", 64)),
            speed=voice.pop("speed", 72),
            mouth=voice.pop("mouth", 128),
            throat=voice.pop("throat", 128),
        )
        return resolve_syllable(text, defaults, **voice)
    return _make


@pytest.fixture
def studio(tmp_path, mock_engine):
    """Studio on the mock engine, writing under tmp_path."""
    config = Config(output_dir=tmp_path / "kits", engine="mock")
    return KitStudio(config, engine=mock_engine)
