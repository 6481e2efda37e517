"""
Engine module - Opaque speech synthesis behind a narrow contract.

The engine NEVER imports from compiler/ or runtime/.
"""

from bitvox.engine.base import (
    BaseSpeechEngine,
    EngineFailure,
    EngineRequest,
    SpeechEngine,
)
from bitvox.engine.loader import list_engines, load_engine
from bitvox.engine.backends import FormantEngine, MockConfig, MockEngine

__all__ = [
    "SpeechEngine",
    "BaseSpeechEngine",
    "EngineRequest",
    "EngineFailure",
    "load_engine",
    "list_engines",
    "FormantEngine",
    "MockEngine",
    "MockConfig",
]
