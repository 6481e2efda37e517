"""
CLI Adapter - Command-line interface.

Thin wrapper over the kit studio.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bitvox.errors import BitvoxError


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="bitvox",
        description="Render text into sampler-ready syllable kits",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-json", action="store_true", help="Log render events as JSON lines on stderr")
    
    subparsers = parser.add_subparsers(dest="command", help="Commands")
    
    # generate command
    generate_parser = subparsers.add_parser("generate", help="Show syllables and kit layout for text")
    generate_parser.add_argument("text", help="Text to split into syllables")
    _add_voice_options(generate_parser)
    
    # export command
    export_parser = subparsers.add_parser("export", help="Render text to a kit WAV")
    export_parser.add_argument("text", help="Text to render")
    export_parser.add_argument("-o", "--output", help="Output file (default: output dir + generated name)")
    _add_voice_options(export_parser)
    
    # preview command
    preview_parser = subparsers.add_parser("preview", help="Play syllables in order (Ctrl-C stops)")
    preview_parser.add_argument("text", help="Text to preview")
    _add_voice_options(preview_parser)
    
    # phonemes command
    subparsers.add_parser("phonemes", help="List phoneme codes")
    
    # presets command
    subparsers.add_parser("presets", help="List voice presets")
    
    # validate-kit command
    validate_parser = subparsers.add_parser("validate-kit", help="Validate an exported kit")
    validate_parser.add_argument("path", help="Path to kit WAV")
    validate_parser.add_argument(
        "--slices",
        type=int,
        default=None,
        help="Expected slice count (default: from file name, else 8)",
    )
    
    # version command
    subparsers.add_parser("version", help="Show version")
    
    parsed = parser.parse_args(args)
    
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if parsed.log_json:
        from bitvox.monitoring import LogLevel, configure_logging
        configure_logging(LogLevel.DEBUG if parsed.verbose else LogLevel.INFO, sys.stderr)
    
    if parsed.command is None:
        parser.print_help()
        return 0
    
    if parsed.command == "version":
        from bitvox import __version__
        print(f"bitvox {__version__}")
        return 0
    
    if parsed.command == "phonemes":
        return _cmd_phonemes()
    
    if parsed.command == "presets":
        return _cmd_presets()
    
    if parsed.command == "validate-kit":
        return _cmd_validate_kit(parsed)
    
    try:
        if parsed.command == "generate":
            return _cmd_generate(parsed)
        if parsed.command == "export":
            return _cmd_export(parsed)
        if parsed.command == "preview":
            return _cmd_preview(parsed)
    except (BitvoxError, ValueError, KeyError, OSError) as e:
        if parsed.log_json:
            from bitvox.monitoring import get_logger
            get_logger().error("command_failed", str(e), command=parsed.command)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    return 1


def _add_voice_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-p", "--preset", help="Voice preset (e.g., little-robot)")
    parser.add_argument("--pitch", type=int, help="Raw pitch 1-255 (lower is higher)")
    parser.add_argument("--note", help="Musical note (C, C#, ... B)")
    parser.add_argument("--octave", type=int, help="Octave for --note")
    parser.add_argument("-s", "--speed", type=int, help="Speed 40-200 (lower is faster)")
    parser.add_argument("--mouth", type=int, help="Mouth 0-255")
    parser.add_argument("--throat", type=int, help="Throat 0-255")
    parser.add_argument("--phonetic", action="store_true", help="Convert each syllable to phoneme codes")
    parser.add_argument("-e", "--engine", help="Engine name (default: $BITVOX_ENGINE or auto)")


def _make_studio(args: argparse.Namespace):
    from bitvox.adapters.api import Config, KitStudio
    from bitvox.compiler import build_defaults
    
    config = Config(
        defaults=build_defaults(
            args.preset,
            pitch=args.pitch,
            note=args.note,
            octave=args.octave,
            speed=args.speed,
            mouth=args.mouth,
            throat=args.throat,
        ),
    )
    if args.engine:
        config.engine = args.engine
    
    listeners = []
    if args.log_json:
        from bitvox.monitoring import EventLogger, get_logger
        listeners.append(EventLogger(get_logger()))
    
    studio = KitStudio(config, listeners=listeners)
    if not studio.generate(args.text, to_phonemes=args.phonetic):
        raise ValueError("Text produced no syllables")
    return studio


def _cmd_generate(args: argparse.Namespace) -> int:
    """Print the syllable table and resulting kit layout."""
    from bitvox.runtime import compute_layout
    
    studio = _make_studio(args)
    batch = studio.render()
    layout = compute_layout([len(r) for r in batch.results])
    
    print(f"{'#':>3}  {'syllable':12} {'note':5} {'pitch':>5} {'speed':>5} {'mouth':>5} {'throat':>6}  samples")
    for i, (syllable, result) in enumerate(zip(batch.syllables, batch.results)):
        samples = str(len(result)) if result.ok else f"FAILED ({result.reason})"
        text = syllable.text + (" *" if syllable.phonetic else "")
        print(
            f"{i + 1:>3}  {text:12} {syllable.note_label:5} {syllable.pitch:>5} "
            f"{syllable.speed:>5} {syllable.mouth:>5} {syllable.throat:>6}  {samples}"
        )
    
    rate = studio.synthesizer.target_rate
    print()
    print(f"Slots: {layout.active_count} active + {layout.padding_count} silent = {layout.target_slice_count}")
    print(f"Slice: {layout.slice_duration_samples} samples ({layout.slice_seconds(rate) * 1000:.1f} ms)")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    studio = _make_studio(args)
    export = studio.export()
    path = studio.save(export, args.output)
    if args.log_json:
        from bitvox.monitoring import get_logger
        get_logger().bind(kit=path.name).info(
            "kit_saved",
            str(path),
            slots=export.layout.target_slice_count,
            slice_samples=export.layout.slice_duration_samples,
            failed=len(export.failed_ids),
        )
    
    print(f"Kit saved to: {path}")
    print(f"Slots: {export.layout.active_count} active / {export.layout.target_slice_count} total")
    print(f"Slice: {export.layout.slice_duration_samples} samples at {export.sample_rate}Hz")
    if export.failed_ids:
        texts = {s.id: s.text for s in studio.syllables}
        failed = ", ".join(texts.get(i, i) for i in export.failed_ids)
        print(f"Failed (silent slots): {failed}")
    return 0


def _cmd_preview(args: argparse.Namespace) -> int:
    from bitvox.runtime import SounddeviceSink
    
    try:
        sink = SounddeviceSink()
    except ImportError:
        print("Error: install sounddevice to enable preview (pip install bitvox[playback])", file=sys.stderr)
        return 1
    
    studio = _make_studio(args)
    scheduler = studio.preview_scheduler(sink)
    scheduler.start(studio.syllables)
    try:
        while scheduler.join(timeout=0.1) is None:
            pass
    except KeyboardInterrupt:
        scheduler.stop()
        sink.stop()
        scheduler.join()
    
    report = scheduler.last_report
    status = "stopped" if report.cancelled else "finished"
    print(f"Preview {status}: {len(report.played_ids)} played, {len(report.failed_ids)} failed")
    return 0


def _cmd_phonemes() -> int:
    """List phoneme codes by category."""
    from bitvox.compiler import by_category
    
    for category, phonemes in by_category().items():
        print(f"  {category}:")
        for phoneme in phonemes:
            print(f"    {phoneme.code:4} - {phoneme.example}")
        print()
    print("  Stress marks 1-8 may follow a vowel.")
    return 0


def _cmd_presets() -> int:
    """List voice presets."""
    from bitvox.compiler import PRESETS
    
    print("Voice presets:")
    print()
    for name, preset in PRESETS.items():
        print(f"  {name:18} - {preset.description}")
        print(f"                       Pitch: {preset.pitch}, Speed: {preset.speed}, "
              f"Mouth: {preset.mouth}, Throat: {preset.throat}")
    return 0


def _cmd_validate_kit(args: argparse.Namespace) -> int:
    from bitvox.adapters.kit_validator import validate_kit
    
    path = Path(args.path)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1
    
    result = validate_kit(path, args.slices)
    status = "OK" if result.valid else "INVALID"
    print(f"{status} {path.name}")
    if result.channels:
        print(f"   {result.channels} ch, {result.subtype}, {result.sample_rate}Hz, "
              f"{result.slice_count} x {result.slice_frames} samples")
    for issue in result.issues:
        print(f"   - {issue}")
    
    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())
