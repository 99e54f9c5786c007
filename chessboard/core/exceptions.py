"""
Custom exceptions.

Every error raised on purpose by this package derives from GameError, so callers (service layer, presentation layer)
can catch a single type if they do not care about the specifics.
"""


class GameError(Exception):
    """Base class for all errors raised by the board manager"""


class InvalidMoveError(GameError):
    """Source square is empty / out of range, or the destination is not one the piece may move to."""


class WrongSideError(GameError):
    """Attempt to move (or select) a piece that does not belong to the side to move."""


class InvalidPositionError(GameError):
    """A placement string could not be turned into a Board."""


class InvalidRequestError(GameError):
    """
    Raised by the request models.

    NOTE: must not derive from ValueError, otherwise pydantic wraps it in a ValidationError.
    """


class GameNotFoundError(GameError):
    """No game registered under the requested ID."""
