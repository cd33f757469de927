#!/usr/bin/env python3
"""Command line front end.

Usage:
    mastermind tree                          # all strategies, 4 pegs 6 colors
    mastermind tree --pegs 3 --colors 5      # smaller game
    mastermind tree --strategy minmax --strategy entropy --workers 0
    mastermind tree --no-repeat --colors 10  # 4 pegs, 10 colors, no repeats
    mastermind simulate --secret 3415        # step-by-step games
    mastermind canonical --levels 1          # canonical guesses, two levels
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from mastermind.codebreaker import CodeBreaker
from mastermind.codeword import Codeword, Feedback
from mastermind.engine import Engine
from mastermind.equivalence import (
    ConstraintEquivalenceFilter,
    EquivalenceFilter,
    NullEquivalenceFilter,
)
from mastermind.errors import MastermindError
from mastermind.rules import Rules
from mastermind.strategies import builtin_strategies, find_strategy
from mastermind.strategy import CodeBreakerOptions, Strategy
from mastermind.strategy_tree import StrategyTree, build_strategy_tree


def _print_settings(rules: Rules, options: CodeBreakerOptions | None = None) -> None:
    print("Game Settings")
    print("---------------")
    print(f"Number of pegs:      {rules.pegs}")
    print(f"Number of colors:    {rules.colors}")
    print(f"Color repeatable:    {str(rules.repeatable).lower()}")
    print(f"Number of codewords: {rules.size()}")
    if options is not None:
        print()
        print("Options")
        print("---------")
        print(f"Optimize obvious guess: {str(options.optimize_obvious).lower()}")
        print(f"Guess possibility only: {str(options.possibility_only).lower()}")


def _select_strategies(engine: Engine, names: list[str] | None) -> list[Strategy]:
    if not names:
        return builtin_strategies(engine)
    return [find_strategy(name, engine) for name in names]


def _make_filter(engine: Engine, enabled: bool) -> EquivalenceFilter:
    return ConstraintEquivalenceFilter(engine) if enabled else NullEquivalenceFilter()


# ── tree ───────────────────────────────────────────────────

def run_trees(
    engine: Engine,
    strategies: list[Strategy],
    options: CodeBreakerOptions,
    use_filter: bool = True,
    max_depth: int = 10,
    max_workers: int | None = None,
) -> list[tuple[StrategyTree, float]]:
    """Build and report a strategy tree for each strategy."""
    count = engine.rules.size()
    header = " ".join(f"{d:>4}" for d in range(1, max_depth)) + f" {'>' + str(max_depth - 1):>4}"
    print()
    print("Frequency Table")
    print("-----------------")
    print(f"Strategy: Total   Avg {header}   Time")

    results = []
    for strat in strategies:
        print(f"{strat.name:>8}: running...", end="", flush=True)
        t0 = time.time()
        tree = build_strategy_tree(
            engine, strat, options,
            filter=_make_filter(engine, use_filter),
            max_workers=max_workers,
        )
        elapsed = time.time() - t0
        info = tree.get_depth_info(max_depth)

        cells = " ".join(f"{n:>4}" if n > 0 else "   -" for n in info.counts)
        print(f"\r{strat.name:>8}:{info.total_guesses:>6} "
              f"{info.total_guesses / count:>5.3f} {cells} {elapsed:>6.2f}")
        results.append((tree, elapsed))
    return results


def plot_depths(trees: list[StrategyTree], max_depth: int, path: Path) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not installed, skipping plot", file=sys.stderr)
        return

    fig, ax = plt.subplots(figsize=(7, 4))
    depths = list(range(1, max_depth + 1))
    width = 0.8 / max(len(trees), 1)
    for i, tree in enumerate(trees):
        info = tree.get_depth_info(max_depth)
        ax.bar([d + i * width for d in depths], info.counts, width=width,
               label=tree.strategy_name)
    ax.set_title(f"Guesses needed per secret ({trees[0].rules})" if trees else "")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Secrets")
    ax.legend()
    fig.tight_layout()
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150)
    plt.close(fig)
    print(f"Plot saved to {path}")


# ── simulate ───────────────────────────────────────────────

def run_simulation(
    engine: Engine,
    strategies: list[Strategy],
    options: CodeBreakerOptions,
    secret: Codeword,
    use_filter: bool = True,
) -> list[int]:
    """Let every strategy play against *secret*, one row per step.

    Returns the number of guesses each strategy used (``-1`` on failure),
    in the order the strategies were given.
    """
    perfect = Feedback.perfect(engine.rules)
    print()
    print(f"Secret: {secret}")

    breakers = [CodeBreaker(engine, s, options, _make_filter(engine, use_filter))
                for s in strategies]
    result: dict[int, int] = {}
    print(" # " + "".join(f"{s.name:<10}" for s in strategies))
    print("---" + "-" * 10 * len(strategies))

    step = 0
    while len(result) < len(breakers):
        step += 1
        row = f"{step:>2}"
        for i, breaker in enumerate(breakers):
            if i in result:
                row += " " * 10
                continue
            guess = breaker.make_guess()
            if guess.is_empty:
                row += f" {'FAIL':<9}"
                result[i] = -1
                continue
            fb = engine.compare(secret, guess)
            row += f" {str(guess) + ':' + str(fb):<9}"
            breaker.add_constraint(guess, fb)
            if fb == perfect:
                result[i] = step
        print(row)
    return [result[i] for i in range(len(breakers))]


# ── canonical ──────────────────────────────────────────────

def show_canonical_guesses(
    engine: Engine,
    filter: EquivalenceFilter,
    max_level: int,
    level: int = 0,
) -> None:
    candidates = engine.universe
    canonical = filter.get_canonical_guesses(candidates)

    if level >= max_level:
        if len(canonical) > 20:
            print(f"[{level}:{len(canonical)}] ...")
        else:
            print(f"[{level}:{len(canonical)}] " + " ".join(str(g) for g in canonical))
        return

    for i, guess in enumerate(canonical):
        print(f"[{level}:{i}] {guess}")
        child = filter.clone()
        child.add_constraint(guess, Feedback(), candidates)
        show_canonical_guesses(engine, child, max_level, level + 1)


# ── CLI ────────────────────────────────────────────────────

def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--pegs", type=int, default=4, help="Pegs per codeword (default: 4)")
    parser.add_argument("--colors", type=int, default=6, help="Number of colors (default: 6)")
    parser.add_argument("--no-repeat", action="store_true",
                        help="Forbid repeated colors within a codeword")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")


def _add_search(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--strategy", action="append", default=None,
                        help="Strategy name, repeatable (default: all built-in)")
    parser.add_argument("--possibility-only", action="store_true",
                        help="Only guess codewords that may still be the secret")
    parser.add_argument("--no-optimize-obvious", action="store_true",
                        help="Always run the heuristic, even for obvious guesses")
    parser.add_argument("--no-filter", action="store_true",
                        help="Disable symmetry pruning of candidate guesses")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mastermind",
        description="Analyze Mastermind guessing strategies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:", 1)[1],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("tree", help="Build strategy trees and print depth statistics")
    _add_common(p)
    _add_search(p)
    p.add_argument("--max-depth", type=int, default=10,
                   help="Depth buckets in the table; deeper secrets share the last (default: 10)")
    p.add_argument("--workers", type=int, default=None,
                   help="Worker processes per tree (0 = all CPU cores, default: none)")
    p.add_argument("--plot", type=str, default=None, help="Save a depth histogram here")

    p = sub.add_parser("simulate", help="Play every strategy against one secret")
    _add_common(p)
    _add_search(p)
    p.add_argument("--secret", type=str, default=None,
                   help="Secret codeword, e.g. 3415 (default: the codeword at 3/4 of the universe)")

    p = sub.add_parser("canonical", help="List canonical guesses")
    _add_common(p)
    p.add_argument("--levels", type=int, default=0,
                   help="Expand canonical follow-up guesses this many levels deep")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        rules = Rules(pegs=args.pegs, colors=args.colors, repeatable=not args.no_repeat)
        engine = Engine(rules)

        if args.command == "canonical":
            _print_settings(rules)
            print()
            show_canonical_guesses(engine, ConstraintEquivalenceFilter(engine), args.levels)
            return 0

        options = CodeBreakerOptions(
            optimize_obvious=not args.no_optimize_obvious,
            possibility_only=args.possibility_only,
        )
        strategies = _select_strategies(engine, args.strategy)

        if args.command == "tree":
            _print_settings(rules, options)
            results = run_trees(engine, strategies, options,
                                use_filter=not args.no_filter,
                                max_depth=args.max_depth,
                                max_workers=args.workers)
            if args.plot:
                plot_depths([t for t, _ in results], args.max_depth, Path(args.plot))
        else:
            _print_settings(rules)
            if args.secret:
                secret = Codeword.parse(args.secret, rules)
            else:
                secret = engine.universe[len(engine.universe) // 4 * 3]
            run_simulation(engine, strategies, options, secret,
                           use_filter=not args.no_filter)
    except MastermindError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
