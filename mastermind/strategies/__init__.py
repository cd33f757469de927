"""Built-in strategies and lookup by name."""

from __future__ import annotations

from mastermind.engine import Engine
from mastermind.errors import ConfigurationError
from mastermind.heuristics import (
    MaximizeEntropy,
    MaximizePartitions,
    MinimizeAverage,
    MinimizeWorstCase,
)
from mastermind.strategies.heuristic_strat import HeuristicStrategy
from mastermind.strategies.simple_strat import SimpleStrategy
from mastermind.strategy import Strategy

__all__ = [
    "HeuristicStrategy",
    "SimpleStrategy",
    "builtin_strategies",
    "find_strategy",
]


def builtin_strategies(engine: Engine) -> list[Strategy]:
    """Return the standard lineup, simplest first."""
    rules = engine.rules
    return [
        SimpleStrategy(engine),
        HeuristicStrategy(engine, MinimizeWorstCase()),
        HeuristicStrategy(engine, MinimizeAverage()),
        HeuristicStrategy(engine, MaximizeEntropy(rules)),
        HeuristicStrategy(engine, MaximizeEntropy(rules, equal_color_pegs=True)),
        HeuristicStrategy(engine, MaximizePartitions()),
    ]


def find_strategy(name: str, engine: Engine) -> Strategy:
    """Look up a built-in strategy by case-insensitive name."""
    strategies = builtin_strategies(engine)
    for strat in strategies:
        if strat.name.lower() == name.lower():
            return strat
    available = [s.name for s in strategies]
    raise ConfigurationError(f"Strategy {name!r} not found. Available: {available}")
