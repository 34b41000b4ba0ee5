"""Exceptions raised by the Cards tournament engine."""


class CardsError(Exception):
    """Base exception for all Cards engine errors."""

    pass


# ========== Input Exceptions ==========


class InvalidInputError(CardsError):
    """Base exception for malformed pairs, matches or results."""

    pass


class InvalidPairError(InvalidInputError):
    """Raised when a pair or the pair list of a tournament is malformed."""

    pass


class InvalidMatchError(InvalidInputError):
    """Raised when a match is malformed, e.g. a pair playing itself."""

    pass


class InvalidResultError(InvalidInputError):
    """Raised when a result is invalid (negative score, rejected tie)."""

    pass


class UnknownPairError(InvalidInputError):
    """Raised when a match references a pair missing from the pair list."""

    pass


# ========== Tournament Exceptions ==========


class MatchNotFoundError(CardsError):
    """Raised when a requested match does not exist in the tournament."""

    pass


class TournamentStateError(CardsError):
    """Raised when the tournament is in an invalid state for the requested operation."""

    pass


class DuplicateResultError(TournamentStateError):
    """Raised when attempting to record a result that already exists."""

    pass
