"""Mastermind strategy analysis: codeword engine, symmetry pruning and
exhaustive strategy trees."""

from mastermind.codebreaker import CodeBreaker, simulate_game
from mastermind.codeword import EMPTY_CODEWORD, Codeword, CodewordIndexer, Feedback
from mastermind.engine import Engine
from mastermind.equivalence import (
    CodewordPermutation,
    ConstraintEquivalenceFilter,
    EquivalenceFilter,
    NullEquivalenceFilter,
)
from mastermind.errors import (
    ConfigurationError,
    DomainError,
    InconsistentStateError,
    MastermindError,
)
from mastermind.heuristics import (
    Heuristic,
    MaximizeEntropy,
    MaximizePartitions,
    MinimizeAverage,
    MinimizeWorstCase,
)
from mastermind.rules import Rules
from mastermind.strategy import CodeBreakerOptions, Strategy, make_guess
from mastermind.strategy_tree import (
    DepthInfo,
    StrategyTree,
    StrategyTreeNode,
    build_strategy_tree,
)

__all__ = [
    "CodeBreaker",
    "CodeBreakerOptions",
    "Codeword",
    "CodewordIndexer",
    "CodewordPermutation",
    "ConfigurationError",
    "ConstraintEquivalenceFilter",
    "DepthInfo",
    "DomainError",
    "EMPTY_CODEWORD",
    "Engine",
    "EquivalenceFilter",
    "Feedback",
    "Heuristic",
    "InconsistentStateError",
    "MastermindError",
    "MaximizeEntropy",
    "MaximizePartitions",
    "MinimizeAverage",
    "MinimizeWorstCase",
    "NullEquivalenceFilter",
    "Rules",
    "Strategy",
    "StrategyTree",
    "StrategyTreeNode",
    "build_strategy_tree",
    "make_guess",
    "simulate_game",
]
