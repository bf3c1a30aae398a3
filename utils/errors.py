"""Exception taxonomy shared by DAOs, services and the UI.

Services raise ``ValidationError`` before touching the store, DAOs raise
``PersistenceError`` after rolling back, and the UI shows either message
inline and re-queries.
"""


class GestorError(Exception):
    """Base class for application errors."""


class ValidationError(GestorError, ValueError):
    """Malformed or out-of-range input; nothing was written."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PersistenceError(GestorError):
    """The store rejected a write or delete; the whole batch was rolled back."""


class ClassificationAmbiguity(UserWarning):
    """A description looks series-tagged but no sibling records were found."""
