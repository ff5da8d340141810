#!/usr/bin/env python3
"""
Prettify a travel itinerary: replace airport-code and date/time placeholders
with readable text using an airport lookup CSV, normalize vertical whitespace,
and collapse runs of blank lines. Writes the result to an output file and
echoes it to stdout.
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from config import BANNER, ENCODING, GREEN, NO_COLOR_ENV, QUIET_ENV, RED, RESET, TRUTHY, USAGE_EXAMPLE, YELLOW
from lookup import AirportTable, MalformedLookupError, load_lookup
from rewriter import rewrite_codes, rewrite_dates_and_times
from whitespace import normalize_whitespace

load_dotenv()


def _is_blank(line: str) -> bool:
    return not line.strip()


def _append_collapsed(output: list[str], line: str) -> None:
    """Append line; a blank line only follows a non-blank one."""
    if _is_blank(line):
        if output and not _is_blank(output[-1]):
            output.append("")
    else:
        output.append(line)


def prettify_line(line: str, table: AirportTable) -> str:
    """Codes, then dates/times, then whitespace (may introduce newlines)."""
    line = rewrite_codes(line, table)
    line = rewrite_dates_and_times(line)
    return normalize_whitespace(line)


def prettify_lines(lines: list[str], table: AirportTable) -> list[str]:
    """Rewrite every line and assemble the output document."""
    output: list[str] = []
    for line in lines:
        for physical in prettify_line(line, table).split("\n"):
            _append_collapsed(output, physical)
    return output


def read_lines(path: Path) -> list[str]:
    # Not str.splitlines(): real \v and \f must reach normalize_whitespace
    with open(path, encoding=ENCODING) as f:
        text = f.read()
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def write_lines(path: Path, lines: list[str]) -> None:
    with open(path, "w", encoding=ENCODING, newline="\n") as f:
        for line in lines:
            f.write(line + "\n")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY


def _paint(text: str, color: str, stream) -> str:
    if os.getenv(NO_COLOR_ENV) is not None or not stream.isatty():
        return text
    return f"{color}{text}{RESET}"


def _error(message: str) -> None:
    print(_paint(f"Error: {message}", RED, sys.stderr), file=sys.stderr)


def _echo(lines: list[str]) -> None:
    print(BANNER)
    for line in lines:
        print(line)
    print(BANNER)


def run(input_path: Path, output_path: Path, lookup_path: Path, echo: bool = True) -> list[str]:
    """Load the lookup, prettify the input and write the output file."""
    table = load_lookup(lookup_path)
    lines = read_lines(input_path)
    prettified = prettify_lines(lines, table)
    write_lines(output_path, prettified)

    if echo:
        _echo(prettified)
    print(
        f"Done. Wrote {output_path} with {len(prettified)} lines ({len(table)} airport codes loaded).",
        file=sys.stderr,
    )
    return prettified


def build_parser() -> argparse.ArgumentParser:
    usage_hint = _paint("itinerary usage:", GREEN, sys.stdout) + " " + _paint(USAGE_EXAMPLE, YELLOW, sys.stdout)
    parser = argparse.ArgumentParser(
        prog="prettify",
        description="Prettify a travel itinerary using an airport lookup CSV",
        epilog=usage_hint,
    )
    parser.add_argument("input", help="Itinerary text file to read")
    parser.add_argument("output", help="Path the prettified itinerary is written to")
    parser.add_argument("airport_lookup", metavar="airport-lookup", help="Airport lookup CSV")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    input_path = Path(args.input)
    lookup_path = Path(args.airport_lookup)
    if not input_path.exists():
        _error(f"Input not found: {input_path}")
        sys.exit(1)
    if not lookup_path.exists():
        _error(f"Airport lookup not found: {lookup_path}")
        sys.exit(1)

    try:
        run(input_path, Path(args.output), lookup_path, echo=not _env_flag(QUIET_ENV))
    except MalformedLookupError as e:
        _error(f"Airport lookup malformed: {e}")
        sys.exit(1)
    except OSError as e:
        _error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
