"""
Mock Backend - For testing without real synthesis.

Features:
    - Deterministic output length (samples per character, or exact lengths)
    - Silent, tone, or ramp output
    - Failure injection by text
    - Exception injection by text
    - Call recording
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

import numpy as np

from bitvox.engine.base import BaseSpeechEngine, EngineFailure, EngineRequest, PhonemeOutput, RenderOutput


@dataclass
class CallRecord:
    """Record of a mock engine call."""
    method: str
    request: EngineRequest | None = None
    text: str = ""
    timestamp: float = field(default_factory=time.time)


@dataclass
class MockConfig:
    """Configuration for the mock engine."""
    sample_rate: int = 22050
    output_type: str = "tone"  # silence, tone, ramp
    
    # Length: explicit per-text lengths win over samples_per_char
    samples_per_char: int = 100
    lengths: dict[str, int] = field(default_factory=dict)
    
    tone_frequency: float = 440.0
    tone_amplitude: float = 0.5
    
    # Failure injection
    fail_texts: set[str] = field(default_factory=set)
    raise_texts: set[str] = field(default_factory=set)


class MockEngine(BaseSpeechEngine):
    """Mock engine for tests.
    
    Example:
        mock = MockEngine(MockConfig(lengths={"SA": 50}, fail_texts={"XQ"}))
        mock.render(EngineRequest("SA", False, 64, 72, 128, 128))   # 50 samples
        mock.render(EngineRequest("XQ", False, 64, 72, 128, 128))   # EngineFailure
        assert mock.call_count == 2
    """
    
    def __init__(self, config: MockConfig | None = None, **kwargs):
        self._config = config or MockConfig(**kwargs)
        self._calls: list[CallRecord] = []
    
    @property
    def name(self) -> str:
        return "mock"
    
    @property
    def sample_rate(self) -> int:
        return self._config.sample_rate
    
    @property
    def config(self) -> MockConfig:
        return self._config
    
    @property
    def calls(self) -> list[CallRecord]:
        return self._calls
    
    @property
    def call_count(self) -> int:
        return len(self._calls)
    
    @property
    def last_call(self) -> CallRecord | None:
        return self._calls[-1] if self._calls else None
    
    def reset(self) -> None:
        """Clear call history."""
        self._calls.clear()
    
    def render(self, request: EngineRequest) -> RenderOutput:
        self._calls.append(CallRecord("render", request=request, text=request.text))
        cfg = self._config
        
        if request.text in cfg.raise_texts:
            raise RuntimeError(f"Mock engine crashed on {request.text!r}")
        if request.text in cfg.fail_texts:
            return EngineFailure(f"Mock failure for {request.text!r}")
        
        n = cfg.lengths.get(request.text, len(request.text) * cfg.samples_per_char)
        
        if cfg.output_type == "silence":
            return np.zeros(n, dtype=np.float32)
        if cfg.output_type == "ramp":
            return np.linspace(-1.0, 1.0, n, dtype=np.float32) if n > 1 else np.zeros(n, dtype=np.float32)
        
        t = np.arange(n, dtype=np.float64) / cfg.sample_rate
        return (cfg.tone_amplitude * np.sin(2 * np.pi * cfg.tone_frequency * t)).astype(np.float32)
    
    def convert_to_phonemes(self, text: str) -> PhonemeOutput:
        self._calls.append(CallRecord("convert_to_phonemes", text=text))
        if text in self._config.fail_texts:
            return EngineFailure(f"Mock conversion failure for {text!r}")
        return " ".join(text.upper())
