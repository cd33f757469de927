"""Codeword and feedback value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from mastermind.errors import DomainError
from mastermind.rules import Rules


@dataclass(frozen=True)
class Codeword:
    """An assignment of colors to pegs.

    The empty codeword (no digits) is the "no guess" sentinel returned by
    a code breaker that has run out of candidates.
    """

    digits: tuple[int, ...] = ()

    @classmethod
    def from_digits(cls, digits: Iterable[int], rules: Rules) -> Codeword:
        """Build a codeword, checking it against *rules*.

        Raises
        ------
        DomainError
            Wrong number of pegs, a color outside ``[0, colors)``, or a
            repeated color when the rules forbid repetition.
        """
        digits = tuple(int(d) for d in digits)
        if len(digits) != rules.pegs:
            raise DomainError(
                f"codeword has {len(digits)} pegs, rules require {rules.pegs}"
            )
        for d in digits:
            if not 0 <= d < rules.colors:
                raise DomainError(
                    f"color {d} out of range [0, {rules.colors})"
                )
        if not rules.repeatable and len(set(digits)) != len(digits):
            raise DomainError(
                f"colors repeat in {''.join(map(str, digits))} but the rules "
                f"forbid repetition"
            )
        return cls(digits)

    @classmethod
    def parse(cls, text: str, rules: Rules) -> Codeword:
        """Parse a string such as ``"0123"`` (one character per peg).

        Colors above 9 are written as letters: ``a`` is 10, ``b`` is 11.
        """
        try:
            digits = [int(ch, 36) for ch in text.strip()]
        except ValueError:
            raise DomainError(f"cannot parse codeword {text!r}") from None
        return cls.from_digits(digits, rules)

    @property
    def is_empty(self) -> bool:
        return not self.digits

    def count(self, color: int) -> int:
        return self.digits.count(color)

    def __getitem__(self, peg: int) -> int:
        return self.digits[peg]

    def __len__(self) -> int:
        return len(self.digits)

    def __iter__(self) -> Iterator[int]:
        return iter(self.digits)

    def __contains__(self, color: object) -> bool:
        return color in self.digits

    def __str__(self) -> str:
        if not self.digits:
            return "-"
        return "".join("0123456789abcdefghijklmnopqrstuvwxyz"[d] for d in self.digits)


EMPTY_CODEWORD = Codeword()


class CodewordIndexer:
    """Pack a codeword into an integer key.

    The key reads the digits as a base-``colors`` number with the first peg
    most significant.  It is injective for any ruleset and, for repeatable
    rules, equals the codeword's position in generation order.
    """

    def __init__(self, rules: Rules):
        self._colors = rules.colors
        self.size = rules.colors ** rules.pegs

    def __call__(self, codeword: Codeword) -> int:
        key = 0
        for d in codeword.digits:
            key = key * self._colors + d
        return key


@dataclass(frozen=True, order=True)
class Feedback:
    """Score of a guess against a secret.

    ``exact`` counts pegs with the right color in the right position
    ("black"), ``color_only`` counts the remaining common colors ("white").
    """

    exact: int = 0
    color_only: int = 0

    def __post_init__(self) -> None:
        if self.exact < 0 or self.color_only < 0:
            raise DomainError(f"negative feedback ({self.exact}, {self.color_only})")

    @classmethod
    def make(cls, exact: int, color_only: int, rules: Rules) -> Feedback:
        if exact + color_only > rules.pegs:
            raise DomainError(
                f"feedback {exact}A{color_only}B exceeds {rules.pegs} pegs"
            )
        if exact == rules.pegs - 1 and color_only == 1:
            raise DomainError(f"feedback {exact}A1B is impossible")
        return cls(exact, color_only)

    @classmethod
    def parse(cls, text: str, rules: Rules) -> Feedback:
        """Parse ``"1A2B"`` style feedback."""
        t = text.strip().upper()
        try:
            a, b = t.rstrip("B").split("A")
            return cls.make(int(a), int(b), rules)
        except ValueError as exc:
            if isinstance(exc, DomainError):
                raise
            raise DomainError(f"cannot parse feedback {text!r}") from None

    @classmethod
    def perfect(cls, rules: Rules) -> Feedback:
        return cls(rules.pegs, 0)

    @staticmethod
    def max_value(rules: Rules) -> int:
        """Largest packed value for *rules* (the perfect feedback)."""
        return rules.pegs * (rules.pegs + 1)

    def pack(self, rules: Rules) -> int:
        return self.exact * (rules.pegs + 1) + self.color_only

    @classmethod
    def unpack(cls, value: int, rules: Rules) -> Feedback:
        exact, color_only = divmod(int(value), rules.pegs + 1)
        return cls(exact, color_only)

    def __str__(self) -> str:
        return f"{self.exact}A{self.color_only}B"
