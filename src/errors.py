"""
Exception types raised by the fraud detection demo.

Every error here is fatal for a run; only the command-line entry point
turns them into an exit code.
"""


class FraudDemoError(Exception):
    """Base class for all demo failures."""


class MissingInputError(FraudDemoError, FileNotFoundError):
    """A required archive or CSV file is absent or unreadable."""


class SchemaMismatchError(FraudDemoError, ValueError):
    """A row or table does not fit the declared column schema."""


class PersistenceError(FraudDemoError, OSError):
    """The trained model could not be saved or loaded."""
