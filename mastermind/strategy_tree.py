"""Build the full decision tree a strategy induces over every secret.

Starting from the whole universe, the strategy picks a guess, the
candidates are split by the feedback that guess would receive, and each
part is solved recursively with its own copy of the equivalence filter.
Branches share nothing mutable, so the root's branches can be built in
worker processes.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from mastermind.codeword import Codeword, Feedback
from mastermind.engine import Engine
from mastermind.equivalence import ConstraintEquivalenceFilter, EquivalenceFilter
from mastermind.errors import InconsistentStateError
from mastermind.rules import Rules
from mastermind.strategy import CodeBreakerOptions, Strategy, make_guess

logger = logging.getLogger(__name__)


# ── Tree types ─────────────────────────────────────────────

@dataclass
class StrategyTreeNode:
    """One decision point.

    Attributes
    ----------
    guess : Codeword
        The guess made at this node.
    depth : int
        Number of guesses made once this one is played (root is 1).
    size : int
        Number of secrets that reach this node.
    solved : bool
        True if *guess* is one of those secrets, which is then resolved
        with ``depth`` guesses.
    children : dict[Feedback, StrategyTreeNode]
        One child per non-perfect feedback, in ascending feedback order.
    """

    guess: Codeword
    depth: int
    size: int
    solved: bool = False
    children: dict[Feedback, StrategyTreeNode] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[StrategyTreeNode]:
        yield self
        for child in self.children.values():
            yield from child.walk()


@dataclass(frozen=True)
class DepthInfo:
    """Distribution of the number of guesses needed per secret."""

    counts: list[int]
    total: int
    total_guesses: int

    @property
    def average(self) -> float:
        return self.total_guesses / self.total if self.total else 0.0


@dataclass
class StrategyTree:
    rules: Rules
    root: StrategyTreeNode
    strategy_name: str = ""

    def get_depth_info(self, max_depth: int = 10) -> DepthInfo:
        """Count secrets by the number of guesses that resolve them.

        ``counts[d - 1]`` holds the secrets resolved with exactly ``d``
        guesses; secrets needing more than *max_depth* are added to the
        last bucket.
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        counts = [0] * max_depth
        total = 0
        total_guesses = 0
        for node in self.root.walk():
            if node.solved:
                counts[min(node.depth, max_depth) - 1] += 1
                total += 1
                total_guesses += node.depth
        return DepthInfo(counts=counts, total=total, total_guesses=total_guesses)

    @property
    def node_count(self) -> int:
        return sum(1 for _ in self.root.walk())

    @property
    def max_depth(self) -> int:
        return max(node.depth for node in self.root.walk() if node.solved)

    def trace(self, engine: Engine, secret: Codeword) -> list[Codeword]:
        """Replay the tree against *secret* and return the guesses made."""
        guesses = []
        perfect = Feedback.perfect(self.rules)
        node = self.root
        while True:
            guesses.append(node.guess)
            fb = engine.compare(secret, node.guess)
            if fb == perfect:
                return guesses
            try:
                node = node.children[fb]
            except KeyError:
                raise InconsistentStateError(
                    f"secret {secret} is not covered by the tree "
                    f"(no branch for {fb} after {node.guess})"
                ) from None


# ── Recursive builder ──────────────────────────────────────

def _build_node(
    engine: Engine,
    strategy: Strategy,
    options: CodeBreakerOptions,
    candidates: Sequence[Codeword],
    filter: EquivalenceFilter,
    depth: int,
) -> StrategyTreeNode:
    node, branches = _expand(engine, strategy, options, candidates, filter, depth)
    for fb, subset, child_filter in branches:
        node.children[fb] = _build_node(
            engine, strategy, options, subset, child_filter, depth + 1
        )
    return node


def _expand(engine, strategy, options, candidates, filter, depth):
    """Choose the guess for a node and prepare its branches.

    Returns the node (without children) and a list of
    ``(feedback, candidates, filter)`` for each non-perfect feedback.
    """
    if not candidates:
        raise InconsistentStateError(f"no candidate secret left at depth {depth}")

    guess = make_guess(engine, strategy, candidates, filter, options)
    if guess.is_empty:
        raise InconsistentStateError(
            f"{strategy.name} made no guess for {len(candidates)} candidates"
        )

    rules = engine.rules
    perfect = engine.perfect_value()
    node = StrategyTreeNode(guess=guess, depth=depth, size=len(candidates))
    branches = []
    for value, subset in engine.partition(guess, candidates).items():
        if value == perfect:
            node.solved = True
            continue
        if len(subset) == len(candidates):
            raise InconsistentStateError(
                f"{strategy.name} guessed {guess}, which does not split "
                f"{len(candidates)} candidates at depth {depth}"
            )
        fb = Feedback.unpack(value, rules)
        child_filter = filter.clone()
        child_filter.add_constraint(guess, fb, subset)
        branches.append((fb, subset, child_filter))
    return node, branches


def _build_branch(args):
    """Worker: build one subtree.  Module-level for pickling."""
    engine, strategy, options, fb, subset, child_filter, depth = args
    return fb, _build_node(engine, strategy, options, subset, child_filter, depth)


def build_strategy_tree(
    engine: Engine,
    strategy: Strategy,
    options: CodeBreakerOptions | None = None,
    filter: EquivalenceFilter | None = None,
    max_workers: int | None = None,
) -> StrategyTree:
    """Build the decision tree *strategy* follows for every secret.

    Parameters
    ----------
    engine : Engine
        Shared, read-only.
    strategy : Strategy
        Chooses the guess at each node.
    options : CodeBreakerOptions or None
        Search settings (defaults: optimize obvious guesses, guess from the
        whole universe).
    filter : EquivalenceFilter or None
        Initial filter state; a fresh :class:`ConstraintEquivalenceFilter`
        by default.
    max_workers : int or None
        If greater than 1, the root's branches are built in that many
        worker processes.  ``0`` means one per CPU core.

    Raises
    ------
    InconsistentStateError
        If the search reaches a node with no candidate or stops making
        progress.
    """
    if options is None:
        options = CodeBreakerOptions()
    if filter is None:
        filter = ConstraintEquivalenceFilter(engine)
    if max_workers == 0:
        max_workers = os.cpu_count() or 4

    t0 = time.time()
    candidates = engine.universe
    if max_workers and max_workers > 1:
        root, branches = _expand(engine, strategy, options, candidates, filter, 1)
        subtrees: dict[Feedback, StrategyTreeNode] = {}
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futs = [
                executor.submit(
                    _build_branch,
                    (engine, strategy, options, fb, subset, child_filter, 2),
                )
                for fb, subset, child_filter in branches
            ]
            for fut in as_completed(futs):
                fb, subtree = fut.result()
                subtrees[fb] = subtree
        root.children = {fb: subtrees[fb] for fb, _, _ in branches}
    else:
        root = _build_node(engine, strategy, options, candidates, filter, 1)

    tree = StrategyTree(rules=engine.rules, root=root, strategy_name=strategy.name)
    logger.info(
        "Built %s tree for %s: %d nodes, max depth %d in %.2fs",
        strategy.name, engine.rules, tree.node_count, tree.max_depth,
        time.time() - t0,
    )
    return tree
