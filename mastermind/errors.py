"""
errors.py

Exception types raised by the Mastermind analysis core.
"""


class MastermindError(Exception):
    """Base class for every error raised by this package."""


class InvalidCodeError(MastermindError, ValueError):
    """Codes of differing length, or a symbol outside the alphabet."""


class EmptyDomainError(MastermindError, ValueError):
    """An operation needed a non-empty set, pool or distribution."""


class DegenerateScoreError(MastermindError, ArithmeticError):
    """A scoring rule hit an undefined value (e.g. a base-1 logarithm).

    Scorers catch this themselves and substitute the limiting value.
    """


class NoProgressError(MastermindError, RuntimeError):
    """A guess left the consistent set unchanged, so analysis would never end."""
