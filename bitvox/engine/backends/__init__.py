"""
Engine backends.
"""

from bitvox.engine.backends.formant import FormantEngine
from bitvox.engine.backends.mock import MockConfig, MockEngine

__all__ = [
    "FormantEngine",
    "MockEngine",
    "MockConfig",
]
