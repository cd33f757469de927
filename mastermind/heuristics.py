"""Scoring functions that rank a guess by the partition it induces.

Each heuristic receives a feedback frequency table (``numpy`` array indexed
by packed feedback value) and returns a comparable score.  A strategy keeps
the guess with the lowest score, or the highest when ``maximize`` is set.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from mastermind.codeword import Feedback
from mastermind.rules import Rules


class Heuristic(ABC):
    """Interface for partition scoring functions."""

    maximize: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def score(self, freq: np.ndarray) -> Any:
        ...

    def better(self, score: Any, best: Any) -> bool:
        """True if *score* strictly beats *best*."""
        return score > best if self.maximize else score < best


class MinimizeWorstCase(Heuristic):
    """Minimize the largest partition (Knuth's minimax).

    With ``levels > 1`` ties on the largest partition are broken by the
    second largest, and so on.
    """

    def __init__(self, levels: int = 1):
        if levels < 1:
            raise ValueError(f"levels must be >= 1, got {levels}")
        self.levels = levels

    @property
    def name(self) -> str:
        return "MinMax" if self.levels == 1 else f"MinMax{self.levels}"

    def score(self, freq: np.ndarray) -> tuple[int, ...]:
        top = np.sort(np.asarray(freq))[::-1][: self.levels].tolist()
        top += [0] * (self.levels - len(top))
        return tuple(int(n) for n in top)


class MinimizeAverage(Heuristic):
    """Minimize the sum of squared partition sizes.

    ``sum(n_i ** 2) / N`` is the expected size of the partition the secret
    falls into, so this minimizes the expected number of candidates left.
    """

    @property
    def name(self) -> str:
        return "MinAvg"

    def score(self, freq: np.ndarray) -> int:
        f = np.asarray(freq, dtype=np.int64)
        return int((f * f).sum())


class MaximizeEntropy(Heuristic):
    """Maximize the Shannon entropy (bits) of the feedback distribution.

    With ``equal_color_pegs`` the non-perfect feedbacks that show the same
    number of pegs in total (exact + color-only) count as one outcome; the
    perfect feedback is always kept apart.
    """

    maximize = True

    def __init__(self, rules: Rules | None = None, equal_color_pegs: bool = False):
        if equal_color_pegs and rules is None:
            raise ValueError("equal_color_pegs needs the rules to decode feedback")
        self.equal_color_pegs = equal_color_pegs
        self._groups = None
        if equal_color_pegs:
            perfect = Feedback.perfect(rules).pack(rules)
            groups = []
            for value in range(Feedback.max_value(rules) + 1):
                fb = Feedback.unpack(value, rules)
                # exact + color_only never exceeds 2 * pegs
                groups.append(2 * rules.pegs + 1 if value == perfect else fb.exact + fb.color_only)
            self._groups = np.array(groups, dtype=np.intp)

    @property
    def name(self) -> str:
        return "EntropyEq" if self.equal_color_pegs else "Entropy"

    def score(self, freq: np.ndarray) -> float:
        f = np.asarray(freq, dtype=np.float64)
        if self._groups is not None:
            f = np.bincount(self._groups, weights=f)
        total = f.sum()
        if total == 0:
            return 0.0
        p = f[f > 0] / total
        return float(-(p * np.log2(p)).sum())


class MaximizePartitions(Heuristic):
    """Maximize the number of distinct feedbacks."""

    maximize = True

    @property
    def name(self) -> str:
        return "MaxParts"

    def score(self, freq: np.ndarray) -> int:
        return int(np.count_nonzero(freq))
