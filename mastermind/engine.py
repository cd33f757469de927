"""Codeword generation and scoring for a given ruleset."""

from __future__ import annotations

import itertools
import logging
from typing import Sequence, overload

import numpy as np

from mastermind.codeword import Codeword, CodewordIndexer, Feedback
from mastermind.errors import ConfigurationError, DomainError
from mastermind.rules import Rules

logger = logging.getLogger(__name__)


class Engine:
    """Owns a :class:`Rules` instance and the codeword universe it defines.

    The universe is generated once.  Its digits and per-color counts are
    kept as ``numpy`` arrays so that a guess can be scored against many
    codewords in one vectorized pass.
    """

    def __init__(self, rules: Rules) -> None:
        if not isinstance(rules, Rules):
            raise ConfigurationError(f"expected Rules, got {type(rules).__name__}")
        self._rules = rules
        self._universe = self.generate_codewords()
        self._positions = {c: i for i, c in enumerate(self._universe)}
        self._indexer = CodewordIndexer(rules)

        self._digits = np.array(
            [c.digits for c in self._universe], dtype=np.int8
        ).reshape(len(self._universe), rules.pegs)
        self._counts = np.stack(
            [(self._digits == color).sum(axis=1) for color in range(rules.colors)],
            axis=1,
        ).astype(np.int8)
        logger.debug("Engine for %s: %d codewords", rules, len(self._universe))

    @property
    def rules(self) -> Rules:
        return self._rules

    @property
    def universe(self) -> list[Codeword]:
        """The generated universe (shared; do not modify)."""
        return self._universe

    @property
    def indexer(self) -> CodewordIndexer:
        return self._indexer

    def perfect_value(self) -> int:
        return Feedback.perfect(self._rules).pack(self._rules)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_codewords(self) -> list[Codeword]:
        """Enumerate every codeword in a fixed order.

        Repeatable rules count in mixed radix (first peg most significant);
        non-repeatable rules list ordered selections of colors
        lexicographically.
        """
        r = self._rules
        if r.repeatable:
            it = itertools.product(range(r.colors), repeat=r.pegs)
        else:
            it = itertools.permutations(range(r.colors), r.pegs)
        return [Codeword(digits) for digits in it]

    def index(self, codeword: Codeword) -> int:
        """Position of *codeword* in the universe."""
        try:
            return self._positions[codeword]
        except KeyError:
            raise DomainError(f"{codeword} is not a codeword of {self._rules}") from None

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @overload
    def compare(self, secret: Codeword, guess: Codeword) -> Feedback: ...

    @overload
    def compare(self, secret: Codeword, guess: Sequence[Codeword]) -> np.ndarray: ...

    def compare(self, secret, guess):
        """Score *guess* against *secret*.

        With a single codeword returns a :class:`Feedback`.  With a sequence
        of codewords returns the packed feedback values as a ``uint8`` array
        aligned with the sequence.  Scoring is symmetric, so the roles of
        secret and guess may be swapped freely.
        """
        if isinstance(guess, Codeword):
            return self._compare_one(secret, guess)
        return self._compare_many(secret, guess)

    def _compare_one(self, secret: Codeword, guess: Codeword) -> Feedback:
        exact = sum(1 for s, g in zip(secret.digits, guess.digits) if s == g)
        common = 0
        for color in set(guess.digits):
            common += min(secret.count(color), guess.count(color))
        return Feedback(exact, common - exact)

    def _compare_many(self, secret: Codeword, guesses: Sequence[Codeword]) -> np.ndarray:
        r = self._rules
        if len(guesses) == 0:
            return np.zeros(0, dtype=np.uint8)
        rows = np.fromiter((self.index(g) for g in guesses), dtype=np.intp, count=len(guesses))
        s = np.array(secret.digits, dtype=np.int8)
        s_counts = np.bincount(s, minlength=r.colors)[: r.colors]

        exact = (self._digits[rows] == s).sum(axis=1)
        common = np.minimum(self._counts[rows], s_counts).sum(axis=1)
        return (exact * (r.pegs + 1) + (common - exact)).astype(np.uint8)

    def count_frequencies(self, feedbacks: np.ndarray) -> np.ndarray:
        """Tally packed feedback values into a table indexed by value."""
        size = Feedback.max_value(self._rules) + 1
        return np.bincount(np.asarray(feedbacks, dtype=np.intp), minlength=size)[:size]

    # ------------------------------------------------------------------
    # Candidate narrowing
    # ------------------------------------------------------------------

    def partition(
        self, guess: Codeword, candidates: Sequence[Codeword]
    ) -> dict[int, list[Codeword]]:
        """Group *candidates* by the feedback *guess* would receive.

        Keys are packed feedback values in ascending order; candidate order
        is preserved inside each group.
        """
        groups: dict[int, list[Codeword]] = {}
        feedbacks = self.compare(guess, candidates)
        for value, c in zip(feedbacks.tolist(), candidates):
            groups.setdefault(value, []).append(c)
        return dict(sorted(groups.items()))

    def filter(
        self, candidates: Sequence[Codeword], guess: Codeword, feedback: Feedback
    ) -> list[Codeword]:
        """Keep only candidates consistent with the observed *feedback*."""
        target = feedback.pack(self._rules)
        feedbacks = self.compare(guess, candidates)
        return [c for c, v in zip(candidates, feedbacks.tolist()) if v == target]
