"""Exceptions raised by the Sudoku validator."""


class ValidatorError(Exception):
    """Base class for all errors raised by this package."""


class MalformedBoardError(ValidatorError, ValueError):
    """
    The input cannot be read as a 9x9 grid of integers.

    Distinct from an invalid puzzle: a board with duplicate digits is a
    normal validation result, never an error.
    """


class ConfigError(ValidatorError):
    """A configuration file is missing fields or holds bad values."""
