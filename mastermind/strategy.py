"""Abstract base class for Mastermind strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from mastermind.codeword import EMPTY_CODEWORD, Codeword, Feedback
from mastermind.engine import Engine
from mastermind.equivalence import EquivalenceFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodeBreakerOptions:
    """Search settings shared by the tree builder and the code breaker.

    Attributes
    ----------
    optimize_obvious : bool
        Skip heuristic evaluation when the choice is obvious: two
        candidates left, or a candidate that separates every remaining
        secret.
    possibility_only : bool
        Only guess codewords that could still be the secret.  By default
        any codeword of the universe may be guessed.
    """

    optimize_obvious: bool = True
    possibility_only: bool = False


class Strategy(ABC):
    """Interface that every guessing strategy must implement."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @property
    @abstractmethod
    def name(self) -> str:
        """Short strategy name (used in reports)."""
        ...

    @abstractmethod
    def select_guess(
        self,
        candidates: Sequence[Codeword],
        filter: EquivalenceFilter,
        guesses: Sequence[Codeword] | None = None,
    ) -> Codeword:
        """Return the next guess.

        Parameters
        ----------
        candidates : sequence of Codeword
            Secrets still consistent with every feedback so far.
        filter : EquivalenceFilter
            Reduces the guess pool to canonical guesses.
        guesses : sequence of Codeword or None
            Pool the guess is drawn from; None means the whole universe.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def obvious_guess(engine: Engine, candidates: Sequence[Codeword]) -> Codeword | None:
    """Return a candidate that is an optimal guess without further search.

    With two candidates either one is optimal.  With more, a candidate
    whose feedback differs for every remaining secret resolves the game in
    at most one more guess, which no other guess can beat.
    """
    if len(candidates) <= 2:
        return candidates[0]
    if len(candidates) > Feedback.max_value(engine.rules) + 1:
        return None
    for guess in candidates:
        feedbacks = engine.compare(guess, candidates)
        if len(set(feedbacks.tolist())) == len(candidates):
            return guess
    return None


def make_guess(
    engine: Engine,
    strategy: Strategy,
    candidates: Sequence[Codeword],
    filter: EquivalenceFilter,
    options: CodeBreakerOptions,
) -> Codeword:
    """Pick the next guess for *candidates*, or the empty codeword if none."""
    if not candidates:
        return EMPTY_CODEWORD
    if len(candidates) == 1:
        return candidates[0]
    if options.optimize_obvious:
        guess = obvious_guess(engine, candidates)
        if guess is not None:
            logger.debug("Obvious guess %s among %d candidates", guess, len(candidates))
            return guess
    pool = candidates if options.possibility_only else None
    return strategy.select_guess(candidates, filter, pool)
