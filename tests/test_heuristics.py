import math

import numpy as np
import pytest

from mastermind.codeword import Feedback
from mastermind.heuristics import (
    MaximizeEntropy,
    MaximizePartitions,
    MinimizeAverage,
    MinimizeWorstCase,
)
from mastermind.rules import Rules


def table(rules, counts):
    freq = np.zeros(Feedback.max_value(rules) + 1, dtype=np.int64)
    for (exact, color_only), n in counts.items():
        freq[Feedback(exact, color_only).pack(rules)] = n
    return freq


def test_minimize_worst_case():
    freq = np.array([3, 0, 1, 2])
    assert MinimizeWorstCase().score(freq) == (3,)
    assert MinimizeWorstCase(levels=2).score(freq) == (3, 2)
    assert MinimizeWorstCase(levels=6).score(freq) == (3, 2, 1, 0, 0, 0)
    assert MinimizeWorstCase().name == "MinMax"
    assert MinimizeWorstCase(levels=2).name == "MinMax2"
    with pytest.raises(ValueError):
        MinimizeWorstCase(levels=0)


def test_worst_case_tie_break_on_second_level():
    h = MinimizeWorstCase(levels=2)
    a = h.score(np.array([4, 4, 1]))
    b = h.score(np.array([4, 3, 2]))
    assert h.better(b, a)
    assert not h.better(a, b)


def test_minimize_average_uses_sum_of_squares():
    h = MinimizeAverage()
    assert h.score(np.array([3, 0, 1, 2])) == 14
    assert h.score(np.array([5])) == 25
    assert h.better(10, 14)
    assert h.name == "MinAvg"


def test_maximize_entropy():
    h = MaximizeEntropy()
    assert h.score(np.array([2, 2])) == pytest.approx(1.0)
    assert h.score(np.array([1, 1, 1, 1, 0])) == pytest.approx(2.0)
    assert h.score(np.array([4])) == 0.0
    assert h.score(np.array([0, 0])) == 0.0
    assert h.score(np.array([1, 2])) == pytest.approx(-(1 / 3) * math.log2(1 / 3) - (2 / 3) * math.log2(2 / 3))
    assert h.better(1.0, 0.5)
    assert h.name == "Entropy"


def test_entropy_with_equal_color_pegs_merges_classes():
    rules = Rules(2, 3)
    merged = MaximizeEntropy(rules, equal_color_pegs=True)
    plain = MaximizeEntropy(rules)

    # 0A2B and 1A1B both show two pegs.
    freq = table(rules, {(0, 2): 1, (1, 1): 1})
    assert plain.score(freq) == pytest.approx(1.0)
    assert merged.score(freq) == 0.0

    # The perfect class is never merged with 0A2B.
    freq = table(rules, {(0, 2): 1, (2, 0): 1})
    assert merged.score(freq) == pytest.approx(1.0)
    assert merged.name == "EntropyEq"


def test_equal_color_pegs_needs_rules():
    with pytest.raises(ValueError):
        MaximizeEntropy(equal_color_pegs=True)


def test_maximize_partitions():
    h = MaximizePartitions()
    assert h.score(np.array([3, 0, 1, 2])) == 3
    assert h.score(np.array([0, 0])) == 0
    assert h.better(4, 3)
    assert h.name == "MaxParts"
