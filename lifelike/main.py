#!/usr/bin/env python3
"""CLI for the sparse Life-like automaton."""

import argparse
import logging
import sys
from pathlib import Path

from .automaton import RULES, Rule, SparseLife
from .metrics import run_with_stats, summarize
from .patterns import get_pattern, list_patterns
from .rle import FormatError
from .visualize import Viewport, record_frames, save_animation, save_image


def _load_life(args) -> SparseLife:
    """Build an automaton from a pattern file or library name, exiting on bad input."""
    try:
        rule = Rule.from_string(args.rule)
    except ValueError as e:
        print(f"Error parsing rule '{args.rule}': {e}")
        sys.exit(1)

    life = SparseLife(rule)
    source = args.pattern

    if Path(source).is_file():
        try:
            life.load_from_text(Path(source).read_text())
        except (OSError, FormatError) as e:
            print(f"Error loading pattern '{source}': {e}")
            sys.exit(1)
    else:
        try:
            life.insert_pattern_at(get_pattern(source))
        except KeyError:
            print(f"Error: '{source}' is neither a file nor a known pattern")
            sys.exit(1)

    return life


def cmd_run(args):
    """Run a pattern and print statistics."""
    life = _load_life(args)

    print(f"Running {args.pattern} under {life.rule.to_string()}")
    print(f"  Steps: {args.steps}")
    print()

    history = [summarize(life)] + run_with_stats(life, args.steps)

    print(f"{'Gen':<8}{'Pop':<10}{'Births':<10}{'Deaths':<10}{'MaxAge':<8}")
    print("-" * 46)
    for stats in history:
        if stats.generation % args.every and stats.generation != life.generation:
            continue
        print(f"{stats.generation:<8}{stats.population:<10}{stats.births:<10}"
              f"{stats.deaths:<10}{stats.max_age:<8}")

    print()
    print(f"Total births: {life.total_births}")
    print(f"Total deaths: {life.total_deaths}")


def cmd_render(args):
    """Render a pattern to a GIF (or PNG for zero steps)."""
    life = _load_life(args)

    viewport = None
    if args.viewport:
        x, y, w, h = args.viewport
        viewport = Viewport(x, y, w, h)

    print(f"Rendering {args.pattern} under {life.rule.to_string()}")

    frames = record_frames(
        life,
        args.steps,
        viewport=viewport,
        margin=args.margin,
        cell_size=args.cell_size,
        colored=not args.mono,
    )

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".png":
        save_image(frames[-1], output)
    else:
        save_animation(frames, output, duration=args.duration)

    print(f"Saved {len(frames)} frame(s) to: {output}")


def cmd_patterns(args):
    """List the built-in patterns."""
    for name in list_patterns():
        print(f"  {name:<22}{len(get_pattern(name))} cells")


def cmd_rules(args):
    """List the preset rules."""
    for name, rule in RULES.items():
        print(f"  {name:<22}{rule.to_string()}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Sparse Life-like cellular automaton on an unbounded grid"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a pattern and print statistics")
    run_parser.add_argument("pattern", type=str, help="RLE file or built-in pattern name")
    run_parser.add_argument("-r", "--rule", type=str, default="B3/S23", help="Rule in B/S notation")
    run_parser.add_argument("--steps", type=int, default=100, help="Generations to run")
    run_parser.add_argument("--every", type=int, default=10, help="Print every N generations")
    run_parser.set_defaults(func=cmd_run)

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a pattern to GIF or PNG")
    render_parser.add_argument("pattern", type=str, help="RLE file or built-in pattern name")
    render_parser.add_argument("-r", "--rule", type=str, default="B3/S23", help="Rule in B/S notation")
    render_parser.add_argument("--steps", type=int, default=60, help="Generations to render")
    render_parser.add_argument("--cell-size", type=int, default=4, help="Cell size in pixels")
    render_parser.add_argument("--margin", type=int, default=8, help="Cells around the pattern")
    render_parser.add_argument("--duration", type=int, default=100, help="Frame duration in ms")
    render_parser.add_argument("--viewport", type=int, nargs=4, metavar=("X", "Y", "W", "H"),
                               default=None, help="Fixed viewport instead of fitting the pattern")
    render_parser.add_argument("--mono", action="store_true", help="Disable age coloring")
    render_parser.add_argument("-o", "--output", type=str, default="output/life.gif", help="Output file")
    render_parser.set_defaults(func=cmd_render)

    # Patterns command
    patterns_parser = subparsers.add_parser("patterns", help="List built-in patterns")
    patterns_parser.set_defaults(func=cmd_patterns)

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="List preset rules")
    rules_parser.set_defaults(func=cmd_rules)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if getattr(args, "every", 1) <= 0:
        print("Error: --every must be positive")
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
