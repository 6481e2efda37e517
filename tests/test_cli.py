"""
Tests for the command-line interface.
"""

import json
from unittest.mock import patch

import pytest

from bitvox import __version__
from bitvox.adapters.cli import main


@pytest.fixture(autouse=True)
def mock_engine_env(monkeypatch, tmp_path):
    monkeypatch.setenv("BITVOX_ENGINE", "mock")
    monkeypatch.setenv("BITVOX_OUTPUT_DIR", str(tmp_path / "out"))


class TestCli:
    """Tests for CLI commands."""
    
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out
    
    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert __version__ in capsys.readouterr().out
    
    def test_presets(self, capsys):
        assert main(["presets"]) == 0
        assert "little-robot" in capsys.readouterr().out
    
    def test_phonemes(self, capsys):
        assert main(["phonemes"]) == 0
        out = capsys.readouterr().out
        assert "Diphthongs" in out
        assert "/H" in out
    
    def test_generate(self, capsys):
        assert main(["generate", "saturday", "--note", "A", "--octave", "4"]) == 0
        out = capsys.readouterr().out
        assert "TUR" in out
        assert "A4" in out
        assert "3 active + 5 silent = 8" in out
    
    def test_export(self, tmp_path, capsys):
        assert main(["export", "banana"]) == 0
        path = tmp_path / "out" / "bitvox_BANANA_3syl_8pad.wav"
        assert path.exists()
        assert str(path) in capsys.readouterr().out
    
    def test_export_explicit_output(self, tmp_path):
        target = tmp_path / "kit.wav"
        assert main(["export", "banana", "-o", str(target), "--preset", "elf"]) == 0
        assert target.read_bytes()[:4] == b"RIFF"
    
    def test_export_formant_engine(self, tmp_path):
        target = tmp_path / "kit.wav"
        assert main(["export", "bit vox", "-o", str(target), "--engine", "formant"]) == 0
        assert main(["validate-kit", str(target)]) == 0
    
    def test_export_with_failures_still_succeeds(self, tmp_path, capsys):
        target = tmp_path / "kit.wav"
        assert main(["export", "r2d2", "-o", str(target), "--engine", "formant"]) == 0
        assert "Failed" in capsys.readouterr().out
    
    def test_log_json(self, tmp_path, capsys):
        assert main(["--verbose", "--log-json", "export", "ba", "-o", str(tmp_path / "kit.wav")]) == 0
        err = capsys.readouterr().err
        assert '"event": "render_complete"' in err
        assert '"syllable_id"' in err
    
    def test_log_json_binds_kit_name(self, tmp_path, capsys):
        assert main(["--log-json", "export", "banana", "-o", str(tmp_path / "kit.wav")]) == 0
        records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
        saved = [r for r in records if r["event"] == "kit_saved"]
        assert len(saved) == 1
        assert saved[0]["kit"] == "kit.wav"
        assert saved[0]["slots"] == 8
        assert saved[0]["failed"] == 0
    
    def test_log_json_reports_failure(self, capsys):
        assert main(["--log-json", "export", "banana", "--preset", "darth"]) == 1
        lines = [line for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
        record = json.loads(lines[0])
        assert record["level"] == "error"
        assert record["event"] == "command_failed"
        assert record["command"] == "export"
        assert "Unknown preset" in record["message"]
    
    def test_unknown_preset(self, capsys):
        assert main(["export", "banana", "--preset", "darth"]) == 1
        assert "Unknown preset" in capsys.readouterr().err
    
    def test_unknown_note(self, capsys):
        assert main(["generate", "banana", "--note", "H"]) == 1
        assert "Unknown note" in capsys.readouterr().err
    
    def test_blank_text(self, capsys):
        assert main(["export", "   "]) == 1
    
    def test_validate_missing_file(self, tmp_path, capsys):
        assert main(["validate-kit", str(tmp_path / "nope.wav")]) == 1
        assert "not found" in capsys.readouterr().err
    
    def test_validate_with_slices(self, tmp_path):
        target = tmp_path / "kit.wav"
        main(["export", "saturday banana deluge", "-o", str(target)])
        assert main(["validate-kit", str(target), "--slices", "16"]) == 0
    
    def test_validate_zero_slices(self, tmp_path, capsys):
        target = tmp_path / "kit.wav"
        main(["export", "banana", "-o", str(target)])
        assert main(["validate-kit", str(target), "--slices", "0"]) == 1
        assert "must be positive" in capsys.readouterr().out
    
    def test_preview_without_sounddevice(self, capsys):
        with patch("bitvox.runtime.playback.SounddeviceSink.__init__", side_effect=ImportError):
            assert main(["preview", "banana"]) == 1
        assert "sounddevice" in capsys.readouterr().err
    
    def test_preview(self, capsys):
        from bitvox.runtime import RecordingSink
        
        with patch("bitvox.runtime.SounddeviceSink", RecordingSink):
            assert main(["preview", "ba"]) == 0
        assert "Preview finished: 1 played" in capsys.readouterr().out
