"""Symmetry-based pruning of candidate guesses.

Scoring is invariant when guess and secret are relabeled consistently: any
permutation of the pegs combined with any permutation of the colors maps a
game onto an equivalent game.  Before any guess is made every such
relabeling is a symmetry, so only a handful of first guesses are worth
evaluating (``0000 0001 0011 0012 0123`` for four pegs).  Each guess fixes
part of the color mapping and eliminates peg permutations that cannot map
it onto itself, and the group shrinks until only the identity is left.
"""

from __future__ import annotations

import copy
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from mastermind.codeword import Codeword, Feedback
from mastermind.engine import Engine
from mastermind.rules import Rules

logger = logging.getLogger(__name__)

UNMAPPED = -1


@dataclass
class CodewordPermutation:
    """A peg permutation together with a partial color mapping.

    ``peg[i]`` is the source peg of position ``i``; ``color[c]`` is the
    image of color ``c`` or :data:`UNMAPPED`.
    """

    peg: tuple[int, ...]
    color: list[int] = field(default_factory=list)

    @classmethod
    def identity(cls, rules: Rules) -> CodewordPermutation:
        return cls(tuple(range(rules.pegs)), [UNMAPPED] * rules.colors)

    def copy(self) -> CodewordPermutation:
        return CodewordPermutation(self.peg, list(self.color))

    def permute_pegs(self, codeword: Codeword) -> Codeword:
        d = codeword.digits
        return Codeword(tuple(d[p] for p in self.peg))

    def permute(self, codeword: Codeword) -> Codeword:
        """Relabel pegs then colors.  Every color used must be mapped."""
        d = codeword.digits
        return Codeword(tuple(self.color[d[p]] for p in self.peg))

    def unmapped_colors(self) -> list[int]:
        return [c for c, target in enumerate(self.color) if target == UNMAPPED]

    def __str__(self) -> str:
        pegs = "".join(str(p) for p in self.peg)
        colors = "".join("*" if c == UNMAPPED else str(c) for c in self.color)
        return f"{pegs}:{colors}"


class EquivalenceFilter(ABC):
    """Interface for filters that drop redundant guesses."""

    @abstractmethod
    def clone(self) -> EquivalenceFilter:
        """Return an independent copy of this filter's state."""
        ...

    @abstractmethod
    def get_canonical_guesses(self, candidates: Sequence[Codeword]) -> list[Codeword]:
        """Return one representative of each equivalence class, in input order."""
        ...

    @abstractmethod
    def add_constraint(
        self,
        guess: Codeword,
        feedback: Feedback,
        remaining: Sequence[Codeword],
    ) -> None:
        """Account for *guess* having been played."""
        ...


class NullEquivalenceFilter(EquivalenceFilter):
    """A filter that treats every codeword as its own class."""

    def clone(self) -> NullEquivalenceFilter:
        return self

    def get_canonical_guesses(self, candidates: Sequence[Codeword]) -> list[Codeword]:
        return list(candidates)

    def add_constraint(self, guess, feedback, remaining) -> None:
        pass


class ConstraintEquivalenceFilter(EquivalenceFilter):
    """Tracks the peg/color relabelings that fix every guess made so far.

    Parameters
    ----------
    engine : Engine
        Supplies the rules.  Shared read-only between clones.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._rules = engine.rules
        # Every peg permutation with a completely free color mapping.
        # Peg permutations are stored as sources rather than targets;
        # since all of them are generated the distinction is moot.
        self._pp = [
            CodewordPermutation(p, [UNMAPPED] * self._rules.colors)
            for p in itertools.permutations(range(self._rules.pegs))
        ]

    @property
    def size(self) -> int:
        """Number of peg permutations still in the group."""
        return len(self._pp)

    @property
    def permutations(self) -> tuple[CodewordPermutation, ...]:
        return tuple(self._pp)

    def clone(self) -> ConstraintEquivalenceFilter:
        other = copy.copy(self)
        other._pp = [p.copy() for p in self._pp]
        return other

    def get_canonical_guesses(self, candidates: Sequence[Codeword]) -> list[Codeword]:
        key = self._engine.indexer
        crossed_out: set[int] = set()
        canonical: list[Codeword] = []

        for guess in candidates:
            if key(guess) in crossed_out:
                continue
            canonical.append(guess)

            # A single permutation only proves equivalence for its own
            # peg mapping, so images under every permutation are crossed.
            for perm in self._pp:
                p = perm.copy()

                # Unmapped colors were never used in a constraint.  Those
                # present in the guess are free: each may go to any
                # unmapped color, and every such choice is equivalent.
                unmapped = p.unmapped_colors()
                free = [c for c in unmapped if c in guess]

                for targets in itertools.permutations(unmapped, len(free)):
                    for c, t in zip(free, targets):
                        p.color[c] = t
                    crossed_out.add(key(p.permute(guess)))

        logger.debug(
            "%d canonical guesses out of %d candidates (group size %d)",
            len(canonical), len(candidates), len(self._pp),
        )
        return canonical

    def add_constraint(
        self,
        guess: Codeword,
        feedback: Feedback,
        remaining: Sequence[Codeword],
    ) -> None:
        """Keep only relabelings that map *guess* onto itself.

        Unmapped colors are bound on demand; a permutation that would need
        a color mapped two different ways is dropped.  The feedback does not
        enter: a relabeling that fixes the guess preserves every feedback
        class.
        """
        before = len(self._pp)
        for i in range(len(self._pp) - 1, -1, -1):
            p = self._pp[i]
            c = p.permute_pegs(guess)

            ok = True
            for j in range(self._rules.pegs):
                source, target = c[j], guess[j]
                if p.color[source] == UNMAPPED:
                    p.color[source] = target
                elif p.color[source] != target:
                    ok = False
                    break

            if not ok:
                self._pp[i] = self._pp[-1]
                self._pp.pop()

        logger.debug(
            "Constraint %s: group size %d -> %d", guess, before, len(self._pp)
        )
