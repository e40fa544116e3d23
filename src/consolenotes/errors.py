"""Exceptions raised by :class:`consolenotes.store.NoteStore` and the file format functions.

Every error is a :class:`NoteError`, so callers that only want to report problems to the user can catch that.
"""

from typing import Optional


class NoteError(Exception):
    """Base class for all errors about notes.

    The string form of the exception is the message meant for the user.
    """
    def __init__(self, message: str, path: Optional[str] = None, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause

    def __str__(self):
        return self.message


class EmptyTitleError(NoteError):
    """Raised when a note is created with a title that is blank after trimming."""
    def __init__(self):
        super().__init__('Title cannot be empty!')


class EmptySearchTermError(NoteError):
    """Raised when searching for a term that is blank after trimming."""
    def __init__(self):
        super().__init__('Search term cannot be empty!')


class CancelledError(NoteError):
    """Raised when an operation needed the user's confirmation and did not get it."""


class NoteNotFoundError(NoteError):
    """Raised when there is no note file for the requested filename."""
    def __init__(self, filename: str, path: Optional[str] = None, cause: BaseException = None):
        super().__init__(f'Note not found: {filename}', path, cause)
        self.filename = filename


class InvalidFormatError(NoteError):
    """Raised when a note file does not start with the expected header block."""


class NoteIOError(NoteError):
    """Raised when the notes directory or a note file cannot be accessed.

    The underlying :exc:`OSError` is available as :attr:`cause`.
    """
