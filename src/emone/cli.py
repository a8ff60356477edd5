"""CLI entrypoint for emone: subcommand dispatcher."""

import argparse
import json
import logging
import sys
from pathlib import Path


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    """Add the text/file input arguments shared by every subcommand."""
    parser.add_argument("text", nargs="?", default=None,
                        help="Text to transcribe (lowercased and trimmed before use)")
    parser.add_argument("--file", default=None,
                        help="Read text from a file instead, or '-' for stdin")
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Log every lexer and aligner step")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="emone",
        description="Transcribe Latin text into the Emonë zig-zag script",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    transcribe_parser = subparsers.add_parser(
        "transcribe",
        help="Print the glyph model for a text",
        description="Transcribe text and print the glyph model a renderer consumes",
    )
    _add_input_args(transcribe_parser)
    transcribe_parser.add_argument("--format", default="json", choices=["json", "text"],
                                   help="Output format (default: json)")
    transcribe_parser.add_argument("--indent", type=int, default=2,
                                   help="JSON indentation (default: 2)")

    phonemes_parser = subparsers.add_parser(
        "phonemes",
        help="Print the phoneme stream for a text",
        description="Show how the lexer splits text into phonemes",
    )
    _add_input_args(phonemes_parser)

    check_parser = subparsers.add_parser(
        "check",
        help="Report stroke names with no template",
        description="Transcribe text and list stroke names missing from a template set",
    )
    _add_input_args(check_parser)
    check_parser.add_argument("--templates", type=Path, default=None,
                              help="File listing available template names, one per line "
                                   "(default: the built-in stroke table)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def _read_text(args: argparse.Namespace) -> str:
    """Resolve the input text from the positional argument or --file."""
    if args.file == "-":
        raw = sys.stdin.read()
    elif args.file is not None:
        path = Path(args.file)
        if not path.exists():
            print(f"Error: file not found: {path}", file=sys.stderr)
            sys.exit(1)
        raw = path.read_text(encoding="utf-8")
    elif args.text is not None:
        raw = args.text
    else:
        print("Error: give some text or --file", file=sys.stderr)
        sys.exit(1)
    return raw.strip().lower()


def _read_templates(path: Path) -> set[str]:
    """Read template names, one per line; blank lines and '#' comments skipped."""
    if not path.exists():
        print(f"Error: template list not found: {path}", file=sys.stderr)
        sys.exit(1)
    names = set()
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            names.add(line)
    return names


def _format_glyph(glyph) -> str:
    line = f"({glyph.x}, {glyph.y}) {glyph.center or '-'}: {' '.join(glyph.strokes)}"
    if glyph.errors:
        line += f"  ! {'; '.join(glyph.errors)}"
    return line


def _run_transcribe(args: argparse.Namespace) -> None:
    """Print the glyph model."""
    from emone.transcribe import canvas_extent, transcribe

    model = transcribe(_read_text(args))

    if args.format == "json":
        print(json.dumps(model.to_dict(), indent=args.indent))
        return

    for glyph in model.glyphs:
        print(_format_glyph(glyph))
    width, height = canvas_extent(model.size)
    print(f"Size: {model.size.x}x{model.size.y} ({width}x{height} px)")


def _run_phonemes(args: argparse.Namespace) -> None:
    """Print one phoneme per line."""
    from emone.transcribe import lex

    for phoneme in lex(_read_text(args)):
        print(json.dumps(phoneme.to_dict()))


def _run_check(args: argparse.Namespace) -> None:
    """List missing stroke names; exit 1 if there are any."""
    from emone.strokes import unresolved_strokes
    from emone.transcribe import transcribe

    available = _read_templates(args.templates) if args.templates else None
    model = transcribe(_read_text(args))
    missing = unresolved_strokes(model, available)

    if not missing:
        total = sum(len(g.strokes) for g in model.glyphs)
        print(f"All {total} strokes resolved")
        return

    for name in missing:
        print(name)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    if args.command == "transcribe":
        _run_transcribe(args)
    elif args.command == "phonemes":
        _run_phonemes(args)
    elif args.command == "check":
        _run_check(args)


if __name__ == "__main__":
    main()
