"""Sequential code breaker: one strategy playing one game."""

from __future__ import annotations

import logging

from mastermind.codeword import Codeword, Feedback
from mastermind.engine import Engine
from mastermind.equivalence import ConstraintEquivalenceFilter, EquivalenceFilter
from mastermind.errors import InconsistentStateError
from mastermind.strategy import CodeBreakerOptions, Strategy, make_guess

logger = logging.getLogger(__name__)


class CodeBreaker:
    """Holds the running state of a strategy across a single game.

    Parameters
    ----------
    engine : Engine
        Shared, read-only.
    strategy : Strategy
        Chooses each guess.
    options : CodeBreakerOptions or None
        Search settings.
    filter : EquivalenceFilter or None
        Initial filter; a fresh :class:`ConstraintEquivalenceFilter` by
        default.
    """

    def __init__(
        self,
        engine: Engine,
        strategy: Strategy,
        options: CodeBreakerOptions | None = None,
        filter: EquivalenceFilter | None = None,
    ) -> None:
        self._engine = engine
        self._strategy = strategy
        self._options = options or CodeBreakerOptions()
        self._filter = filter if filter is not None else ConstraintEquivalenceFilter(engine)
        self._candidates = list(engine.universe)
        self._history: list[tuple[Codeword, Feedback]] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def make_guess(self) -> Codeword:
        """Return the next guess, or the empty codeword if none is left."""
        return make_guess(
            self._engine, self._strategy, self._candidates, self._filter, self._options
        )

    def add_constraint(self, guess: Codeword, feedback: Feedback) -> None:
        """Record the *feedback* received for *guess*.

        Raises
        ------
        InconsistentStateError
            If no candidate is consistent with the feedback history.  The
            candidate set is left empty, so later guesses are empty too.
        """
        self._history.append((guess, feedback))
        self._candidates = self._engine.filter(self._candidates, guess, feedback)
        logger.debug(
            "%s: %s -> %s, %d candidates left",
            self._strategy.name, guess, feedback, len(self._candidates),
        )
        if not self._candidates:
            raise InconsistentStateError(
                f"no secret is consistent with {guess} scoring {feedback}"
            )
        self._filter.add_constraint(guess, feedback, self._candidates)

    @property
    def candidates(self) -> list[Codeword]:
        return list(self._candidates)

    @property
    def history(self) -> list[tuple[Codeword, Feedback]]:
        return list(self._history)

    @property
    def strategy(self) -> Strategy:
        return self._strategy


def simulate_game(
    engine: Engine,
    strategy: Strategy,
    secret: Codeword,
    options: CodeBreakerOptions | None = None,
    max_guesses: int = 20,
) -> list[tuple[Codeword, Feedback]]:
    """Play *strategy* against a known *secret*.

    Returns the ``(guess, feedback)`` history; the last feedback is
    perfect unless the breaker gave up or hit *max_guesses*.
    """
    breaker = CodeBreaker(engine, strategy, options)
    perfect = Feedback.perfect(engine.rules)
    for _ in range(max_guesses):
        guess = breaker.make_guess()
        if guess.is_empty:
            break
        fb = engine.compare(secret, guess)
        breaker.add_constraint(guess, fb)
        if fb == perfect:
            break
    return breaker.history
