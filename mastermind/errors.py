"""Exception hierarchy for the Mastermind engine."""

from __future__ import annotations


class MastermindError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(MastermindError, ValueError):
    """Invalid rules or an unknown strategy."""


class DomainError(MastermindError, ValueError):
    """A codeword or feedback outside the range allowed by the rules."""


class InconsistentStateError(MastermindError, RuntimeError):
    """The candidate set emptied out or the search stopped making progress.

    This means the feedback history contradicts itself (bad input) or a
    strategy misbehaved.  It is never recovered from silently.
    """
