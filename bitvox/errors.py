"""
Bitvox Errors - Domain-specific error types.

Error hierarchy:
    BitvoxError (base)
    ├── InvariantViolationError
    │   └── EncodingFault
    ├── PhonemeSyntaxError
    └── EngineError

Render failures are NOT exceptions. The synthesizer converts every engine
fault into a RenderFailure value; nothing here is raised for a syllable
that merely fails to render.
"""

from __future__ import annotations

from typing import Any


class BitvoxError(Exception):
    """Base error for all bitvox errors."""
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvariantViolationError(BitvoxError):
    """
    Raised when a hard kit invariant is violated.
    
    This is a programming error, not a recoverable condition:
    - A rendered buffer is longer than its slot
    - Render results do not line up with the syllables they belong to
    """
    
    def __init__(
        self,
        invariant: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"[{invariant}] {message}", details)
        self.invariant = invariant


class EncodingFault(InvariantViolationError):
    """Malformed sample data reached the WAV encoder."""
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__("encoding", message, details)


class PhonemeSyntaxError(BitvoxError):
    """Phoneme notation could not be parsed."""
    
    def __init__(self, text: str, position: int, message: str | None = None):
        super().__init__(
            message or f"Invalid phoneme at position {position} in {text!r}",
            details={"text": text, "position": position},
        )
        self.text = text
        self.position = position


class EngineError(BitvoxError):
    """A synthesis engine is misconfigured or unusable."""
