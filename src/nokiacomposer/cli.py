#!/usr/bin/env python3
"""nokiacomposer - Compile and render Nokia composer scores."""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from pycomposer import NOKIA_TUNE, Composer, ComposerError, duration_of, frequency_of
from pycomposer.synthesis import STYLES, render_notes, samples_to_wav

from .config import get_composer_config, get_render_config
from .paths import config_file, ensure_dir, renders_dir

log = logging.getLogger(__name__)


def read_score(args: argparse.Namespace) -> str:
    """Get the score from --nokia, the positional argument, or stdin."""
    if args.nokia:
        return NOKIA_TUNE
    if args.score:
        return args.score
    return sys.stdin.read()


def make_composer(args: argparse.Namespace) -> Composer:
    """Build a Composer from config, with command-line flags taking priority."""
    settings = get_composer_config()
    bpm = args.bpm if args.bpm is not None else settings["bpm"]
    a4_frequency = args.a4 if args.a4 is not None else settings["a4_frequency"]
    return Composer(bpm, a4_frequency)


def default_render_path() -> Path:
    """Timestamped WAV path in the renders directory, unique within the second."""
    output_dir = ensure_dir(renders_dir())
    base_name = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

    counter = 0
    path = output_dir / f"{base_name}.wav"
    while path.exists():
        counter += 1
        path = output_dir / f"{base_name}-{counter}.wav"
    return path


def cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile command."""
    score = read_score(args)
    try:
        composer = make_composer(args)
        notes = composer.compile_score(score)
    except (ComposerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([list(note) for note in notes]))
    else:
        for frequency, duration in notes:
            print(f"{frequency} {duration}")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Handle the render command."""
    score = read_score(args)
    render_config = get_render_config()
    style = args.style or render_config.get("style", "sine")
    sample_rate = args.sample_rate or render_config.get("sample_rate", 44100)
    gap_ms = args.gap_ms if args.gap_ms is not None else render_config.get("gap_ms", 0)

    try:
        composer = make_composer(args)
        notes = composer.compile_score(score)
        samples = render_notes(notes, sample_rate=sample_rate, style=style, gap_ms=gap_ms)
    except (ComposerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not notes:
        print("Error: No notes to render", file=sys.stderr)
        return 1

    output = Path(args.output) if args.output else default_render_path()
    try:
        samples_to_wav(samples, output, sample_rate)
    except OSError as e:
        print(f"Error: Cannot write {output}: {e}", file=sys.stderr)
        return 1
    log.debug("Rendered %d notes with %s at %d Hz", len(notes), style, sample_rate)
    print(output)
    return 0


def cmd_freq(args: argparse.Namespace) -> int:
    """Handle the freq command."""
    a4_frequency = args.a4 if args.a4 is not None else get_composer_config()["a4_frequency"]
    try:
        print(frequency_of(args.pitch, a4_frequency))
    except ComposerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_rest(args: argparse.Namespace) -> int:
    """Handle the rest command - how long to pause for a rest of FRACTION."""
    bpm = args.bpm if args.bpm is not None else get_composer_config()["bpm"]
    try:
        print(duration_of(args.fraction, bpm))
    except ComposerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the config command."""
    settings = get_composer_config()
    print(f"Config file: {config_file()}")
    print(f"Tempo: {settings['bpm']} BPM")
    print(f"A4 frequency: {settings['a4_frequency']} Hz")
    return 0


def _add_score_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "score", nargs="?", help="Score to compile (reads from stdin if not provided)"
    )
    parser.add_argument(
        "--nokia", action="store_true", help="Use the built-in Nokia tune"
    )
    parser.add_argument("--bpm", type=int, help="Tempo in quarter beats per minute")
    parser.add_argument("--a4", type=int, help="Frequency of A4 in Hz")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="nokiacomposer",
        description="Compile Nokia composer scores to frequencies and durations",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # compile command
    compile_parser = subparsers.add_parser(
        "compile", help="Print frequency/duration pairs for a score"
    )
    _add_score_arguments(compile_parser)
    compile_parser.add_argument(
        "--json", action="store_true", help="Print a JSON list of [frequency, duration]"
    )
    compile_parser.set_defaults(func=cmd_compile)

    # render command
    render_parser = subparsers.add_parser("render", help="Render a score to a WAV file")
    _add_score_arguments(render_parser)
    render_parser.add_argument("-o", "--output", help="Output WAV path")
    render_parser.add_argument("--style", choices=STYLES, help="Synthesis style")
    render_parser.add_argument("--sample-rate", type=int, help="Sample rate in Hz")
    render_parser.add_argument(
        "--gap-ms", type=int, help="Silence at the end of each note in milliseconds"
    )
    render_parser.set_defaults(func=cmd_render)

    # freq command
    freq_parser = subparsers.add_parser("freq", help="Print the frequency of a pitch")
    freq_parser.add_argument("pitch", help="Pitch such as c#4")
    freq_parser.add_argument("--a4", type=int, help="Frequency of A4 in Hz")
    freq_parser.set_defaults(func=cmd_freq)

    # rest command
    rest_parser = subparsers.add_parser(
        "rest", help="Print the duration in milliseconds of a note fraction"
    )
    rest_parser.add_argument("fraction", type=int, help="Note fraction (4 = quarter)")
    rest_parser.add_argument("--bpm", type=int, help="Tempo in quarter beats per minute")
    rest_parser.set_defaults(func=cmd_rest)

    # config command
    config_parser = subparsers.add_parser("config", help="Show effective settings")
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
