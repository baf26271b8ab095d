#!/usr/bin/env python3
"""
Build script for modbook.

Loads a book outline (book.yaml), renders it to an mdBook source tree,
and lints exercise sources.

Usage:
    python build.py rust                        Render books/*rust*/book.yaml
    python build.py render rust --output-dir out
    python build.py lint rust                   Lint exercise sources
    python build.py lint rust --fix             Lint and auto-fix

Requires: PyYAML
"""

import os
import sys
import argparse
import traceback

# Ensure modbook is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from modbook.config import BookConfig, ConfigError
from modbook.resolve import find_outline
from modbook.render import render, RenderBookError
from modbook.lint import Linter


# ── Resolve book ───────────────────────────────────────────────────────


def resolve_book(identifier):
    """Find the outline, load it. Exits on failure."""
    project_root = os.getcwd()
    outline = find_outline(identifier, project_root)

    if not outline:
        print(f"Error: Could not find book '{identifier}'")
        print(f"  Searched in: {os.path.join(project_root, 'books')}")
        print("  Tip: Run from the project root, or pass a direct path.")
        sys.exit(1)

    try:
        config = BookConfig.load(outline)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    return config


# ── Render command ─────────────────────────────────────────────────────


def cmd_render(args):
    """Render the book to an mdBook source tree."""
    config = resolve_book(args.book)
    config.summary()

    output_dir = args.output_dir or config.output_path
    print(f"  Output:    {os.path.join(output_dir, 'book')}")

    print(f"\n{'─' * 60}")
    print(f"  Rendering: {config.title}")
    print(f"{'─' * 60}")

    try:
        render(config.to_book(), output_dir, verbose=args.verbose)
    except RenderBookError as e:
        print(f"  ✗ {e}")
        if e.__cause__ is not None:
            print(f"    {e.__cause__}")
        sys.exit(1)

    print(f"  ✓ {os.path.join(output_dir, 'book', 'src', 'SUMMARY.md')}")
    print(f"\n{'─' * 60}")
    print("  Done.")


# ── Lint command ───────────────────────────────────────────────────────


def cmd_lint(args):
    """Lint exercise source files."""
    config = resolve_book(args.book)

    color = not args.no_color and sys.stdout.isatty()

    print(f"\n  Linting: {config.title}")
    print(f"  Outline: {config.outline_path}")
    print(f"  Mode:    {'FIX' if args.fix else 'CHECK'}")
    print()

    linter = Linter(
        config.to_book(),
        fix=args.fix,
        verbose=args.verbose,
        color=color,
    )

    success = linter.run()
    sys.exit(0 if success else 1)


# ── Argument Parser ────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        description="Exercise book to mdBook renderer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s rust                         Render the book
  %(prog)s render rust --output-dir out Render into out/book
  %(prog)s lint rust                    Check exercise sources
  %(prog)s lint rust --fix              Auto-fix what's fixable
        """,
    )

    sub = parser.add_subparsers(dest="command")

    # ── render (default when no subcommand) ────────────────
    render_p = sub.add_parser("render", help="Render mdBook sources (default)")
    _add_book_arg(render_p)
    render_p.add_argument("--output-dir", help="Override output directory")
    render_p.add_argument("--verbose", "-v", action="store_true")

    # ── lint ───────────────────────────────────────────────
    lint_p = sub.add_parser("lint", help="Lint exercise sources")
    _add_book_arg(lint_p)
    lint_p.add_argument("--fix", action="store_true", help="Auto-fix fixable issues")
    lint_p.add_argument("--verbose", "-v", action="store_true")
    lint_p.add_argument("--no-color", action="store_true", help="Plain output")

    return parser


def _add_book_arg(parser):
    parser.add_argument("book", help="Outline path, book number, or keyword")


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None):
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv

    # Allow bare "build.py rust" without the "render" subcommand
    known_commands = {"render", "lint"}
    if argv and argv[0] not in known_commands and not argv[0].startswith("-"):
        argv = ["render"] + argv
    args = parser.parse_args(argv)

    dispatch = {
        "render": cmd_render,
        "lint": cmd_lint,
    }

    handler = dispatch.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        log_path = "build_error.log"
        with open(log_path, "w") as f:
            traceback.print_exc(file=f)
        print(f"\nUnexpected error: {e}")
        print(f"Full traceback written to {log_path}")
        sys.exit(1)
