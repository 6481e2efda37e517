"""
Tests for kit layout and assembly.
"""

import numpy as np
import pytest

from bitvox.errors import InvariantViolationError
from bitvox.runtime import (
    KitLayout,
    RenderFailure,
    RenderSuccess,
    assemble_kit,
    compute_layout,
    kit_filename,
    target_slice_count,
)


def _success(syllable, n, value=0.5):
    return RenderSuccess(syllable.id, np.full(n, value, dtype=np.float32))


class TestTargetSliceCount:
    """Tests for bank padding."""
    
    @pytest.mark.parametrize("active,expected", [
        (0, 8), (1, 8), (7, 8), (8, 8), (9, 16), (16, 16), (17, 24), (64, 64), (65, 72),
    ])
    def test_next_multiple_of_eight(self, active, expected):
        assert target_slice_count(active) == expected
    
    def test_negative(self):
        with pytest.raises(ValueError):
            target_slice_count(-1)


class TestLayout:
    """Tests for layout computation and invariants."""
    
    def test_uses_longest_render(self):
        layout = compute_layout([100, 150, 80])
        assert layout == KitLayout(150, 3, 8)
        assert layout.padding_count == 5
        assert layout.total_samples == 1200
    
    def test_all_failed_gives_one_sample_slots(self):
        layout = compute_layout([0, 0])
        assert layout.slice_duration_samples == 1
        assert layout.total_samples == 8
    
    def test_no_syllables(self):
        layout = compute_layout([])
        assert layout == KitLayout(1, 0, 8)
    
    def test_slot_offsets(self):
        layout = KitLayout(150, 3, 8)
        assert layout.slot_offset(0) == 0
        assert layout.slot_offset(7) == 1050
        with pytest.raises(IndexError):
            layout.slot_offset(8)
    
    def test_slice_seconds(self):
        assert KitLayout(441, 1, 8).slice_seconds(44100) == pytest.approx(0.01)
    
    @pytest.mark.parametrize("args", [(10, 3, 12), (10, 9, 8), (0, 1, 8)])
    def test_invalid_layout(self, args):
        with pytest.raises(InvariantViolationError):
            KitLayout(*args)


class TestAssembleKit:
    """Tests for buffer assembly."""
    
    def test_three_syllables(self, make_syllable):
        syllables = [make_syllable(t) for t in ("SA", "TUR", "DAY")]
        results = [
            _success(syllables[0], 100, 0.25),
            _success(syllables[1], 150, 0.5),
            _success(syllables[2], 80, -0.5),
        ]
        kit = assemble_kit(syllables, results)
        
        assert len(kit.samples) == 1200
        assert kit.samples.dtype == np.float32
        np.testing.assert_array_equal(kit.slot(0)[:100], 0.25)
        np.testing.assert_array_equal(kit.slot(0)[100:], 0.0)
        np.testing.assert_array_equal(kit.samples[150:300], 0.5)
        np.testing.assert_array_equal(kit.slot(2)[:80], -0.5)
        np.testing.assert_array_equal(kit.slot(2)[80:], 0.0)
        np.testing.assert_array_equal(kit.samples[450:], 0.0)
    
    def test_failed_syllable_keeps_its_slot(self, make_syllable):
        syllables = [make_syllable(t) for t in ("SA", "XQ", "DAY")]
        results = [
            _success(syllables[0], 50),
            RenderFailure(syllables[1].id, "nope"),
            _success(syllables[2], 50, 0.75),
        ]
        kit = assemble_kit(syllables, results)
        
        assert kit.layout.active_count == 3
        np.testing.assert_array_equal(kit.slot(1), 0.0)
        np.testing.assert_array_equal(kit.slot(2), 0.75)
    
    def test_all_failed(self, make_syllable):
        syllables = [make_syllable("XQ")]
        kit = assemble_kit(syllables, [RenderFailure(syllables[0].id, "nope")])
        assert len(kit.samples) == 8
        assert not kit.samples.any()
    
    def test_twelve_syllables_pad_to_sixteen(self, make_syllable):
        syllables = [make_syllable("SA") for _ in range(12)]
        results = [_success(s, 10) for s in syllables]
        kit = assemble_kit(syllables, results)
        assert kit.layout.target_slice_count == 16
        assert len(kit.samples) == 160
        np.testing.assert_array_equal(kit.samples[120:], 0.0)
    
    def test_misaligned_results(self, make_syllable):
        a, b = make_syllable("SA"), make_syllable("NA")
        with pytest.raises(InvariantViolationError):
            assemble_kit([a, b], [_success(b, 10), _success(a, 10)])
        with pytest.raises(InvariantViolationError):
            assemble_kit([a, b], [_success(a, 10)])


class TestKitFilename:
    """Tests for export names."""
    
    def test_slug_from_text(self):
        assert kit_filename("saturday deluge", KitLayout(10, 5, 8)) == "bitvox_SATURDAY-DELUGE_5syl_8pad.wav"
    
    def test_punctuation_dropped(self):
        assert kit_filename("it's  a-ok!", KitLayout(10, 4, 8)) == "bitvox_IT-S-A-OK_4syl_8pad.wav"
    
    def test_empty_text(self):
        assert kit_filename("", KitLayout(10, 0, 8)) == "bitvox_kit_0syl_8pad.wav"
    
    def test_slug_truncated(self):
        name = kit_filename("supercalifragilistic expialidocious", KitLayout(10, 12, 16))
        slug = name[len("bitvox_"):-len("_12syl_16pad.wav")]
        assert len(slug) <= 32
        assert not slug.endswith("-")
