"""Game rules: peg count, color count and the repetition policy."""

from __future__ import annotations

import math
from dataclasses import dataclass

from mastermind.errors import ConfigurationError

# Packed feedback values (at most pegs * (pegs + 1)) must fit in a byte.
MAX_PEGS = 15
# One base-36 character per peg in the text form.
MAX_COLORS = 36


@dataclass(frozen=True)
class Rules:
    """Immutable description of a Mastermind variant.

    Attributes
    ----------
    pegs : int
        Number of positions in a codeword.
    colors : int
        Number of symbols a peg may take.
    repeatable : bool
        If False, a color appears at most once in a codeword, which
        requires ``pegs <= colors``.
    """

    pegs: int = 4
    colors: int = 6
    repeatable: bool = True

    def __post_init__(self) -> None:
        if self.pegs < 1:
            raise ConfigurationError(f"pegs must be >= 1, got {self.pegs}")
        if self.pegs > MAX_PEGS:
            raise ConfigurationError(f"pegs must be <= {MAX_PEGS}, got {self.pegs}")
        if self.colors < 1:
            raise ConfigurationError(f"colors must be >= 1, got {self.colors}")
        if self.colors > MAX_COLORS:
            raise ConfigurationError(f"colors must be <= {MAX_COLORS}, got {self.colors}")
        if not self.repeatable and self.pegs > self.colors:
            raise ConfigurationError(
                f"{self.pegs} pegs need at least as many colors when colors "
                f"cannot repeat (got {self.colors})"
            )

    def size(self) -> int:
        """Number of codewords in the universe."""
        if self.repeatable:
            return self.colors ** self.pegs
        return math.perm(self.colors, self.pegs)

    def __str__(self) -> str:
        suffix = "r" if self.repeatable else "n"
        return f"p{self.pegs}c{self.colors}{suffix}"
