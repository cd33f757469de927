"""Heuristic strategy: score every canonical guess by its partition."""

from __future__ import annotations

import logging
from typing import Sequence

from mastermind.codeword import EMPTY_CODEWORD, Codeword
from mastermind.engine import Engine
from mastermind.equivalence import EquivalenceFilter
from mastermind.heuristics import Heuristic
from mastermind.strategy import Strategy

logger = logging.getLogger(__name__)


class HeuristicStrategy(Strategy):
    """Pick the canonical guess whose feedback partition scores best.

    Each canonical guess is compared against every candidate, the feedback
    frequencies are tallied, and the heuristic ranks the table.  On a tie a
    guess that may still be the secret beats one that cannot be; otherwise
    the earliest guess in pool order is kept.
    """

    def __init__(self, engine: Engine, heuristic: Heuristic):
        super().__init__(engine)
        self.heuristic = heuristic

    @property
    def name(self) -> str:
        return self.heuristic.name

    def select_guess(
        self,
        candidates: Sequence[Codeword],
        filter: EquivalenceFilter,
        guesses: Sequence[Codeword] | None = None,
    ) -> Codeword:
        if not candidates:
            return EMPTY_CODEWORD
        pool = self.engine.universe if guesses is None else guesses
        canonical = filter.get_canonical_guesses(pool)

        possible = set(candidates)
        best_guess = EMPTY_CODEWORD
        best_score = None
        best_possible = False
        for g in canonical:
            freq = self.engine.count_frequencies(self.engine.compare(g, candidates))
            score = self.heuristic.score(freq)
            if best_score is None or self.heuristic.better(score, best_score):
                best_score, best_guess, best_possible = score, g, g in possible
            elif not best_possible and score == best_score and g in possible:
                best_guess, best_possible = g, True

        logger.debug(
            "%s: %s scores %s over %d canonical guesses, %d candidates",
            self.name, best_guess, best_score, len(canonical), len(candidates),
        )
        return best_guess
