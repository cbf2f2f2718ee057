import argparse
import json
import logging
import sys
from pathlib import Path

import structlog

from revdiff import __version__
from revdiff.aligner import align
from revdiff.config import InputTooLargeError, ensure_within_limit
from revdiff.diff import diff
from revdiff.ingest import read_document
from revdiff.markup import collect_changes, render_critic_markup, render_side_by_side
from revdiff.tokenizer import tokenize


def _configure_logging(verbose: bool):
    # Results go to stdout, so diagnostics stay on stderr
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _read_input(path: Path) -> str:
    try:
        return ensure_within_limit(read_document(path), label=path.name)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _print_result(original: str, revised: str, args: argparse.Namespace):
    if args.json:
        result = diff(original, revised)
        print(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    if args.side_by_side:
        print(render_side_by_side(diff(original, revised)))
        return

    ops = align(tokenize(original), tokenize(revised))

    if args.markup:
        print(render_critic_markup(ops))
        return

    changes = collect_changes(ops)
    print(f"Found {len(changes)} changes:", file=sys.stderr)
    for change in changes:
        if change.symbol == "~":
            print(f"[~] '{change.original_text}' -> '{change.revised_text}'")
        elif change.symbol == "-":
            print(f"[-] {change.original_text}")
        else:
            print(f"[+] {change.revised_text}")


def handle_extract(args):
    text = _read_input(args.input)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Extracted text to {args.output}", file=sys.stderr)
    else:
        print(text)


def handle_diff(args):
    text_orig = _read_input(args.original)
    text_mod = _read_input(args.revised)
    _print_result(text_orig, text_mod, args)


def handle_compare(args):
    try:
        original = ensure_within_limit(args.original or "", label="original")
        revised = ensure_within_limit(args.revised or "", label="revised")
    except InputTooLargeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    _print_result(original, revised, args)


def _add_output_flags(parser: argparse.ArgumentParser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--json", action="store_true", help="Output both segment lists as JSON")
    group.add_argument("--markup", action="store_true", help="Output inline CriticMarkup")
    group.add_argument("--side-by-side", action="store_true", help="Output original and revised views")


def main(argv=None):
    parser = argparse.ArgumentParser(prog="revdiff", description="Revdiff: word-level correction diff")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Log alignment details to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Subcommands")

    p_extract = subparsers.add_parser("extract", help="Extract raw text from a DOCX file")
    p_extract.add_argument("input", type=Path, help="Input DOCX file")
    p_extract.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    p_extract.set_defaults(func=handle_extract)

    p_diff = subparsers.add_parser("diff", help="Compare two files (DOCX or text)")
    p_diff.add_argument("original", type=Path, help="Original DOCX or text file")
    p_diff.add_argument("revised", type=Path, help="Revised DOCX or text file")
    _add_output_flags(p_diff)
    p_diff.set_defaults(func=handle_diff)

    p_compare = subparsers.add_parser("compare", help="Compare two strings given on the command line")
    p_compare.add_argument("--original", type=str, default="", help="Original text")
    p_compare.add_argument("--revised", type=str, default="", help="Revised text")
    _add_output_flags(p_compare)
    p_compare.set_defaults(func=handle_compare)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
