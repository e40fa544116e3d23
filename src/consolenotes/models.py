"""Defines the note file format and the pure functions around it.

The most important functions are :func:`encode_note`, :func:`decode_note` and :func:`sanitize_filename`.

A note file looks like this::

    Title: Groceries
    Created: 2024-03-01 09:15:00
    Modified: 2024-03-02 18:40:12
    ═══════════════════════════════
    eggs
    milk
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
import re
from typing import Optional

from consolenotes.errors import InvalidFormatError

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
SEPARATOR = '═' * 31
DEFAULT_EXTENSION = '.txt'
TITLE_PREFIX = 'Title: '
CREATED_PREFIX = 'Created: '
MODIFIED_PREFIX = 'Modified: '
UNTITLED = 'Untitled'
ELLIPSIS = '...'

FILENAME_UNSAFE_RE = re.compile(r'[^a-zA-Z0-9\-_ ]')
LINE_BREAK_RE = re.compile(r'\r\n|\r|\n')


def format_timestamp(dt: datetime) -> str:
    return dt.strftime(TIMESTAMP_FORMAT)


def now_timestamp() -> str:
    """Returns the current local time in :data:`TIMESTAMP_FORMAT`."""
    return format_timestamp(datetime.now())


def sanitize_filename(title: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Returns the filename used to store a note with the given title.

    Every character other than ASCII letters, digits, ``-``, ``_`` and space is replaced with ``_``, and the
    extension is appended. For example, ``Hi/There?`` becomes ``Hi_There_.txt``.

    The title is used as given; callers are expected to have trimmed it already.
    """
    return FILENAME_UNSAFE_RE.sub('_', title) + extension


def summary_title(first_line: str, width: int = 40) -> str:
    """Returns the text shown for a note in listings, based on the first line of its file.

    The ``Title: `` prefix is removed if present. A first line without the prefix is shown as it is.
    Text longer than ``width`` characters is cut and ``...`` is appended.
    """
    text = first_line[len(TITLE_PREFIX):] if first_line.startswith(TITLE_PREFIX) else first_line
    if len(text) > width:
        return text[:width] + ELLIPSIS
    return text


@dataclass
class NoteHeader:
    """The fixed fields at the top of every note file."""

    title: str
    """The title as the user typed it (trimmed). Not sanitized."""

    created: str
    """Creation time, exactly as stored in the file (normally :data:`TIMESTAMP_FORMAT`)."""

    modified: str
    """Time of the last edit, exactly as stored in the file (normally :data:`TIMESTAMP_FORMAT`)."""

    @classmethod
    def new(cls, title: str, timestamp: Optional[str] = None) -> NoteHeader:
        """Returns a header for a note created now, with equal created and modified times."""
        timestamp = timestamp or now_timestamp()
        return cls(title=title, created=timestamp, modified=timestamp)


@dataclass
class Note:
    header: NoteHeader
    body: str

    @property
    def title(self) -> str:
        return self.header.title


def encode_note(note: Note) -> str:
    """Returns the full file content for the note.

    Line breaks in the title are replaced by spaces so the header is always four lines. Trailing whitespace is
    removed from the body, and the content ends with a single newline.
    """
    title = LINE_BREAK_RE.sub(' ', note.header.title)
    return (f'{TITLE_PREFIX}{title}\n'
            f'{CREATED_PREFIX}{note.header.created}\n'
            f'{MODIFIED_PREFIX}{note.header.modified}\n'
            f'{SEPARATOR}\n'
            f'{note.body.rstrip()}\n')


def _strip_prefix(line: str, prefix: str, path: Optional[str]) -> str:
    if not line.startswith(prefix):
        raise InvalidFormatError(f'Invalid note format: expected a line starting with "{prefix.strip()}"', path)
    return line[len(prefix):]


def decode_note(text: str, path: Optional[str] = None) -> Note:
    """Parses the content of a note file.

    Raises :exc:`consolenotes.errors.InvalidFormatError` if the text does not contain the four header lines, or
    if the title, created or modified line lacks its prefix. The content of the separator line is not checked.
    The body is everything after the separator line, minus the final newline.
    """
    parts = text.split('\n', 3)
    if len(parts) < 4:
        raise InvalidFormatError('Invalid note format: the header is missing or incomplete', path)
    header = NoteHeader(
        title=_strip_prefix(parts[0], TITLE_PREFIX, path),
        created=_strip_prefix(parts[1], CREATED_PREFIX, path),
        modified=_strip_prefix(parts[2], MODIFIED_PREFIX, path),
    )
    # parts[3] is the separator line followed by the body
    body = parts[3].split('\n', 1)[1] if '\n' in parts[3] else ''
    if body.endswith('\n'):
        body = body[:-1]
    return Note(header, body)
