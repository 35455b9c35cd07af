"""Exception classes for td-tictactoe."""


class TicTacToeError(Exception):
    """Base exception for all td-tictactoe errors."""

    pass


class OutOfBoundsError(TicTacToeError, IndexError):
    """Raised when a board coordinate falls outside the 3x3 grid."""

    pass


class BoardEncodingError(TicTacToeError, ValueError):
    """Raised when a board string cannot be decoded."""

    pass


class UninitializedStateError(TicTacToeError, LookupError):
    """Raised when a value is read or updated before it was initialized."""

    pass


class PersistenceError(TicTacToeError):
    """Base exception for estimates file problems."""

    pass


class EstimatesReadError(PersistenceError):
    """Raised when an estimates file cannot be opened or read."""

    pass


class EstimatesParseError(PersistenceError):
    """Raised when an estimates file has a malformed header or entry."""

    pass


class PersistenceConflictError(PersistenceError, FileExistsError):
    """Raised when saving would overwrite an existing estimates file."""

    pass


class ConfigurationError(TicTacToeError):
    """Raised when configuration is invalid."""

    pass
