"""
Engine Loader - Pick a synthesis engine by name.
"""

from __future__ import annotations

import logging

from bitvox.engine.base import SpeechEngine

logger = logging.getLogger(__name__)

ENGINES = ("formant", "mock")


def load_engine(engine: str = "auto", **kwargs) -> SpeechEngine:
    """Load a speech engine.
    
    Args:
        engine: Engine name or "auto".
                Options: "formant", "mock", "auto"
        **kwargs: Engine-specific options
    
    Returns:
        Initialized SpeechEngine
    
    Raises:
        ValueError: If the engine name is unknown
    """
    if engine == "auto":
        logger.debug("Auto-selected formant engine")
        engine = "formant"
    
    if engine == "formant":
        from bitvox.engine.backends.formant import FormantEngine
        return FormantEngine(**kwargs)
    
    if engine == "mock":
        from bitvox.engine.backends.mock import MockEngine
        return MockEngine(**kwargs)
    
    raise ValueError(f"Unknown engine: {engine}")


def list_engines() -> list[str]:
    """List available engines."""
    return list(ENGINES)
