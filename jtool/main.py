#!/usr/bin/env python3
"""
JTool

A CLI tool to parse and stringify nested JSON documents and to compare two
JSON documents structurally.

Usage:
    python -m jtool.main parse [input] [output] [-p]        Unwrap stringified JSON
    python -m jtool.main stringify [input] [output] -p a.b  Stringify nested keys
    python -m jtool.main remove-spaces [input] [output]     Compact JSON output
    python -m jtool.main compare <old> <new>                Show a structural diff

Input and output default to STDIN and STDOUT ("-").

Supported Input Formats:
    - JSON (.json, .txt, anything else): the whole input is one document
    - JSONL (.jsonl, .ndjson): one document per line
    - Parquet (.parquet, .pq): one document per row
"""

import argparse
import json
import sys
from typing import Any, Iterator

from jtool.core import (
    JToolError,
    compare,
    diff_to_records,
    encode_paths,
    render_diff,
    to_compact_json,
)
from jtool.data_formats import STDIN_NAME, get_loader, read_text


INPUT_FORMAT_CHOICES = ['auto', 'json', 'jsonl', 'parquet']


def iter_values(filename: str, input_format: str = "auto", index: int | None = None) -> Iterator[Any]:
    """Lazily yield normalized documents from an input file.

    Args:
        filename: Path to the input file, or "-" for STDIN.
        input_format: Format hint ('auto', 'json', 'jsonl', 'parquet').
        index: Only yield the document at this zero-based index.

    Yields:
        Each document, normalized.
    """
    loader = get_loader(filename, input_format)
    if index is not None:
        yield loader.get_value_at_index(filename, index)
        return
    yield from loader.load_values(filename)


def format_value(value: Any, prettify: bool = False) -> str:
    """Format a JSON value compactly, or indented when prettify is set."""
    if prettify:
        return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
    return to_compact_json(value)


def write_output(filename: str, chunks: list[str]) -> None:
    """Write output chunks, one per line.

    Output to STDOUT always ends with a newline; output to a file does not
    get a trailing newline added.
    """
    if filename == STDIN_NAME:
        for chunk in chunks:
            print(chunk)
        return

    with open(filename, "w", encoding="utf-8") as f:
        f.write("\n".join(chunks))


# ============== Commands ==============

def cmd_parse(args):
    """Normalize every input document."""
    results = [
        format_value(value, args.prettify)
        for value in iter_values(args.input, args.input_format, args.index)
    ]
    write_output(args.output, results)


def cmd_stringify(args):
    """Normalize every input document and stringify the requested paths."""
    results = [
        encode_paths(value, args.paths)
        for value in iter_values(args.input, args.input_format, args.index)
    ]
    write_output(args.output, results)


def cmd_remove_spaces(args):
    """Normalize every input document and write it compactly."""
    results = [
        to_compact_json(value)
        for value in iter_values(args.input, args.input_format, args.index)
    ]
    write_output(args.output, results)


def cmd_compare(args):
    """Show the structural diff between two documents."""
    if args.old == STDIN_NAME and args.new == STDIN_NAME:
        raise ValueError("Only one of the compared documents can be read from STDIN")

    entries = compare(read_text(args.old).strip(), read_text(args.new).strip())

    if args.format == 'json':
        print(json.dumps(diff_to_records(entries), indent=2, ensure_ascii=False, allow_nan=False))
    elif entries:
        print(render_diff(entries))

    if args.exit_code and entries:
        sys.exit(1)


def add_io_arguments(subparser: argparse.ArgumentParser) -> None:
    """Add the input/output arguments shared by the document commands."""
    subparser.add_argument('input', nargs='?', default=STDIN_NAME, help='Input file, defaults to STDIN')
    subparser.add_argument('output', nargs='?', default=STDIN_NAME, help='Output file, defaults to STDOUT')
    subparser.add_argument(
        '--input-format',
        choices=INPUT_FORMAT_CHOICES,
        default='auto',
        help='Input file format (default: auto-detect)'
    )
    subparser.add_argument('-i', '--index', type=int, help='Only process the document at this index (0-based)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jtool',
        description="JTool - a JSON tool to parse and stringify nested JSON objects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Parse command
    parse_parser = subparsers.add_parser(
        'parse', aliases=['p'], help='Parse JSON input and return the JSON object'
    )
    add_io_arguments(parse_parser)
    parse_parser.add_argument('-p', '--prettify', action='store_true', help='Prettify and format output JSON')
    parse_parser.set_defaults(func=cmd_parse)

    # Stringify command
    stringify_parser = subparsers.add_parser(
        'stringify', aliases=['s'], help='Stringify JSON input and return the JSON string'
    )
    add_io_arguments(stringify_parser)
    stringify_parser.add_argument(
        '-p', '--paths',
        action='append',
        metavar='PATH',
        help='Key hierarchy separated by (.) to stringify; repeat for several paths'
    )
    stringify_parser.set_defaults(func=cmd_stringify)

    # Remove spaces command
    remove_parser = subparsers.add_parser(
        'remove-spaces', aliases=['r', 'rem'], help='Trim extra spaces and newlines from JSON'
    )
    add_io_arguments(remove_parser)
    remove_parser.set_defaults(func=cmd_remove_spaces)

    # Compare command
    compare_parser = subparsers.add_parser(
        'compare', aliases=['c', 'diff', 'd'], help="Compare two JSON's and generate a diff"
    )
    compare_parser.add_argument('old', help='Old file ("-" for STDIN)')
    compare_parser.add_argument('new', help='New file ("-" for STDIN)')
    compare_parser.add_argument(
        '-f', '--format',
        choices=['text', 'json'],
        default='text',
        help='Diff output format (default: text)'
    )
    compare_parser.add_argument(
        '--exit-code',
        action='store_true',
        help='Exit with status 1 when the documents differ'
    )
    compare_parser.set_defaults(func=cmd_compare)

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (JToolError, OSError, ValueError, IndexError, RecursionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
