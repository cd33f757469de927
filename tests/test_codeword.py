import pytest

from mastermind.codeword import EMPTY_CODEWORD, Codeword, CodewordIndexer, Feedback
from mastermind.engine import Engine
from mastermind.errors import ConfigurationError, DomainError
from mastermind.rules import Rules


def test_rules_size():
    assert Rules(2, 3).size() == 9
    assert Rules(4, 6).size() == 1296
    assert Rules(4, 10, repeatable=False).size() == 5040
    assert Rules(3, 3, repeatable=False).size() == 6


@pytest.mark.parametrize(
    "pegs,colors,repeatable",
    [(0, 6, True), (4, 0, True), (5, 4, False), (16, 1, True), (1, 37, True)],
)
def test_invalid_rules(pegs, colors, repeatable):
    with pytest.raises(ConfigurationError):
        Rules(pegs, colors, repeatable)


def test_largest_rules_are_accepted():
    assert Rules(15, 1).size() == 1
    assert Rules(1, 36).size() == 36


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        Rules(pegs=-1)


def test_parse_and_format():
    rules = Rules(4, 6)
    cw = Codeword.parse("0123", rules)
    assert cw.digits == (0, 1, 2, 3)
    assert str(cw) == "0123"
    assert cw[2] == 2
    assert len(cw) == 4
    assert list(cw) == [0, 1, 2, 3]

    wide = Codeword.parse("09ab", Rules(4, 12))
    assert wide.digits == (0, 9, 10, 11)
    assert str(wide) == "09ab"


@pytest.mark.parametrize("text", ["0126", "012", "01234", "01x3", "01-3"])
def test_parse_rejects_out_of_domain(text):
    with pytest.raises(DomainError):
        Codeword.parse(text, Rules(4, 6))


def test_repeated_colors_rejected_without_repetition():
    with pytest.raises(DomainError):
        Codeword.from_digits([0, 0, 1, 1], Rules(4, 6, repeatable=False))
    assert Codeword.from_digits([0, 0, 1, 1], Rules(4, 6)).digits == (0, 0, 1, 1)


def test_membership_and_count():
    cw = Codeword.parse("1022", Rules(4, 6))
    assert 2 in cw
    assert 5 not in cw
    assert cw.count(2) == 2
    assert cw.count(1) == 1
    assert cw.count(4) == 0


def test_empty_codeword():
    assert EMPTY_CODEWORD.is_empty
    assert str(EMPTY_CODEWORD) == "-"
    assert not Codeword.parse("00", Rules(2, 3)).is_empty


def test_indexer_matches_generation_order_for_repeatable_rules():
    rules = Rules(3, 4)
    index = CodewordIndexer(rules)
    universe = Engine(rules).universe
    assert [index(c) for c in universe] == list(range(rules.size()))


def test_indexer_is_injective_without_repetition():
    rules = Rules(3, 5, repeatable=False)
    index = CodewordIndexer(rules)
    keys = [index(c) for c in Engine(rules).universe]
    assert len(set(keys)) == len(keys)
    assert max(keys) < index.size


def test_feedback_packing():
    rules = Rules(4, 6)
    fb = Feedback(2, 1)
    assert fb.pack(rules) == 11
    assert Feedback.unpack(11, rules) == fb
    assert Feedback.perfect(rules) == Feedback(4, 0)
    assert Feedback.perfect(rules).pack(rules) == Feedback.max_value(rules) == 20
    assert str(fb) == "2A1B"


def test_feedback_validation():
    rules = Rules(4, 6)
    with pytest.raises(DomainError):
        Feedback(-1, 0)
    with pytest.raises(DomainError):
        Feedback.make(3, 2, rules)
    with pytest.raises(DomainError):
        Feedback.make(3, 1, rules)
    assert Feedback.make(2, 2, rules) == Feedback(2, 2)


def test_feedback_parse():
    rules = Rules(4, 6)
    assert Feedback.parse("1A2B", rules) == Feedback(1, 2)
    assert Feedback.parse("4a0b", rules) == Feedback(4, 0)
    with pytest.raises(DomainError):
        Feedback.parse("x", rules)
    with pytest.raises(DomainError):
        Feedback.parse("3A2B", rules)
