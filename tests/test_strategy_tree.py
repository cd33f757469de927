import pytest

from mastermind.codeword import EMPTY_CODEWORD, Codeword, Feedback
from mastermind.engine import Engine
from mastermind.equivalence import NullEquivalenceFilter
from mastermind.errors import InconsistentStateError
from mastermind.heuristics import MinimizeWorstCase
from mastermind.rules import Rules
from mastermind.strategies import HeuristicStrategy, SimpleStrategy, builtin_strategies
from mastermind.strategy import CodeBreakerOptions, Strategy
from mastermind.strategy_tree import build_strategy_tree

OPTIONS = [
    CodeBreakerOptions(),
    CodeBreakerOptions(optimize_obvious=False),
    CodeBreakerOptions(possibility_only=True),
    CodeBreakerOptions(optimize_obvious=False, possibility_only=True),
]


class FixedStrategy(Strategy):
    """Always plays the same codeword."""

    def __init__(self, engine, guess):
        super().__init__(engine)
        self.guess = guess

    @property
    def name(self):
        return "Fixed"

    def select_guess(self, candidates, filter, guesses=None):
        return self.guess


def check_tree(engine, tree):
    rules = engine.rules
    info = tree.get_depth_info()
    assert info.total == rules.size()
    assert sum(info.counts) == rules.size()

    perfect = Feedback.perfect(rules)
    total_guesses = 0
    for secret in engine.universe:
        guesses = tree.trace(engine, secret)
        assert guesses[-1] == secret
        assert engine.compare(secret, guesses[-1]) == perfect
        assert len(set(guesses)) == len(guesses)
        total_guesses += len(guesses)
    assert total_guesses == info.total_guesses


@pytest.mark.parametrize("options", OPTIONS)
@pytest.mark.parametrize(
    "rules",
    [Rules(1, 3), Rules(2, 2), Rules(2, 3), Rules(3, 3), Rules(3, 4, repeatable=False), Rules(3, 4)],
)
def test_every_strategy_resolves_every_secret(rules, options):
    engine = Engine(rules)
    for strat in builtin_strategies(engine):
        tree = build_strategy_tree(engine, strat, options)
        check_tree(engine, tree)
        assert tree.strategy_name == strat.name


def test_minmax_tree_on_four_pegs_four_colors():
    engine = Engine(Rules(4, 4))
    tree = build_strategy_tree(engine, HeuristicStrategy(engine, MinimizeWorstCase()))
    check_tree(engine, tree)
    assert tree.root.size == 256
    assert tree.root.depth == 1


def test_minmax_matches_knuth_on_the_classic_game():
    engine = Engine(Rules(4, 6))
    tree = build_strategy_tree(engine, HeuristicStrategy(engine, MinimizeWorstCase()))
    info = tree.get_depth_info()
    assert info.total_guesses == 5801
    assert tree.max_depth == 5


def test_ties_prefer_a_possible_secret():
    rules = Rules(2, 3)
    engine = Engine(rules)
    strat = HeuristicStrategy(engine, MinimizeWorstCase())
    candidates = [Codeword.parse("11", rules), Codeword.parse("12", rules)]
    # 01 splits the pair just as well but comes first in the universe.
    assert strat.select_guess(candidates, NullEquivalenceFilter()) == candidates[0]


def test_tree_without_symmetry_pruning():
    engine = Engine(Rules(3, 3))
    strat = HeuristicStrategy(engine, MinimizeWorstCase())
    tree = build_strategy_tree(engine, strat, filter=NullEquivalenceFilter())
    check_tree(engine, tree)


def test_simple_strategy_depths_on_one_peg():
    rules = Rules(1, 3)
    engine = Engine(rules)
    for strat in builtin_strategies(engine):
        tree = build_strategy_tree(engine, strat)
        info = tree.get_depth_info(max_depth=5)
        assert info.counts == [1, 1, 1, 0, 0]
        assert info.total == 3
        assert info.total_guesses == 6
        assert info.average == pytest.approx(2.0)
        assert tree.max_depth == 3
        assert tree.node_count == 3


def test_deep_secrets_share_the_last_bucket():
    engine = Engine(Rules(2, 3))
    tree = build_strategy_tree(engine, SimpleStrategy(engine))
    full = tree.get_depth_info(max_depth=10)
    capped = tree.get_depth_info(max_depth=1)
    assert capped.counts == [9]
    assert capped.total == full.total == 9
    assert capped.total_guesses == full.total_guesses
    with pytest.raises(ValueError):
        tree.get_depth_info(max_depth=0)


def test_tree_structure():
    rules = Rules(2, 3)
    engine = Engine(rules)
    tree = build_strategy_tree(engine, SimpleStrategy(engine))
    root = tree.root
    assert root.guess == Codeword.parse("00", rules)
    assert root.solved
    assert root.size == 9
    assert list(root.children) == [Feedback(0, 0), Feedback(1, 0)]
    assert root.children[Feedback(0, 0)].size == 4
    assert root.children[Feedback(0, 0)].depth == 2
    assert all(Feedback.perfect(rules) not in node.children for node in root.walk())


def test_parallel_build_matches_sequential():
    engine = Engine(Rules(3, 3))
    strat = HeuristicStrategy(engine, MinimizeWorstCase())
    sequential = build_strategy_tree(engine, strat)
    parallel = build_strategy_tree(engine, strat, max_workers=2)
    assert parallel.root == sequential.root
    assert parallel.get_depth_info() == sequential.get_depth_info()


def test_guess_that_does_not_split_is_reported():
    rules = Rules(2, 3)
    engine = Engine(rules)
    strat = FixedStrategy(engine, Codeword.parse("00", rules))
    with pytest.raises(InconsistentStateError):
        build_strategy_tree(engine, strat, CodeBreakerOptions(optimize_obvious=False))


def test_missing_guess_is_reported():
    engine = Engine(Rules(2, 3))
    strat = FixedStrategy(engine, EMPTY_CODEWORD)
    with pytest.raises(InconsistentStateError):
        build_strategy_tree(engine, strat, CodeBreakerOptions(optimize_obvious=False))


def test_trace_of_uncovered_secret():
    rules = Rules(2, 3)
    engine = Engine(rules)
    tree = build_strategy_tree(engine, SimpleStrategy(engine))
    tree.root.children.clear()
    with pytest.raises(InconsistentStateError):
        tree.trace(engine, Codeword.parse("22", rules))
