"""Simple strategy: always guess the first remaining candidate."""

from __future__ import annotations

from mastermind.codeword import EMPTY_CODEWORD
from mastermind.strategy import Strategy


class SimpleStrategy(Strategy):
    """Guess the first codeword still consistent with the feedback.

    Ignores the guess pool and the equivalence filter.
    """

    @property
    def name(self) -> str:
        return "Simple"

    def select_guess(self, candidates, filter, guesses=None):
        if not candidates:
            return EMPTY_CODEWORD
        return candidates[0]
