"""Provides :class:`NoteStore`, which owns the directory of note files."""

from contextlib import contextmanager
from dataclasses import replace
import logging
import os
import os.path
from tempfile import mkstemp
from typing import Iterator, List

from consolenotes.conf import NotesConf
from consolenotes.errors import CancelledError, EmptySearchTermError, EmptyTitleError, NoteIOError,\
    NoteNotFoundError
from consolenotes.models import Note, NoteHeader, UNTITLED, decode_note, encode_note, now_timestamp, sanitize_filename,\
    summary_title

logger = logging.getLogger(__name__)


class NoteStore:
    """Creates, reads, searches, edits and deletes notes in a single directory.

    Notes are addressed by filename (the sanitized title plus the extension), never by a path, and only files
    directly inside :attr:`conf.notes_dir` are considered. The store assumes it is the only writer to the
    directory; nothing is locked.

    Operations raise subclasses of :exc:`consolenotes.errors.NoteError`. Failures of the filesystem are reported
    as :exc:`NoteNotFoundError` or :exc:`NoteIOError`, never as a bare :exc:`OSError`.

    .. attribute:: conf
       :type: consolenotes.conf.NotesConf

    Example:

    .. code-block:: python

       store = NotesConf(notes_dir='/tmp/notes').instantiate()
       store.ensure_directory()
       filename = store.create('Groceries', 'eggs\\nmilk')
       for match in store.search('EGGS'):
           print(store.read(match))
    """
    def __init__(self, conf: NotesConf):
        self.conf = conf

    @property
    def directory(self) -> str:
        return self.conf.notes_dir

    def ensure_directory(self) -> None:
        """Creates the notes directory, and any missing parents, if it does not exist yet."""
        try:
            os.makedirs(self.directory, exist_ok=True)
        except OSError as e:
            raise NoteIOError(f'Error creating notes directory: {e}', self.directory, e)

    def path_for(self, filename: str) -> str:
        """Returns the absolute path of the note with the given filename.

        Raises :exc:`NoteNotFoundError` if the filename could refer to something outside the notes directory.
        """
        if (not filename or filename in ('.', '..') or os.sep in filename
                or (os.altsep and os.altsep in filename)):
            raise NoteNotFoundError(filename)
        return os.path.abspath(os.path.join(self.directory, filename))

    def filename_for(self, title: str) -> str:
        """Returns the filename a note with the given title is stored under.

        Raises :exc:`EmptyTitleError` if the title is blank.
        """
        title = title.strip()
        if not title:
            raise EmptyTitleError()
        return sanitize_filename(title, self.conf.extension)

    def exists(self, filename: str) -> bool:
        return os.path.isfile(self.path_for(filename))

    @contextmanager
    def _io(self, filename: str, action: str) -> Iterator[str]:
        path = self.path_for(filename)
        try:
            yield path
        except FileNotFoundError as e:
            raise NoteNotFoundError(filename, path, e)
        except (OSError, UnicodeDecodeError) as e:
            raise NoteIOError(f'Error {action} note {filename}: {e}', path, e)

    def _write(self, path: str, content: str) -> None:
        fd, tmp = mkstemp(prefix='.', suffix='.tmp', dir=os.path.dirname(path))
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as file:
                file.write(content)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def create(self, title: str, body: str, overwrite: bool = False) -> str:
        """Saves a new note and returns its filename.

        If a note with the same filename already exists, it is replaced only when ``overwrite`` is True;
        otherwise :exc:`CancelledError` is raised and the existing file is left alone.

        Raises :exc:`EmptyTitleError` if the title is blank after trimming.
        """
        title = title.strip()
        filename = self.filename_for(title)
        with self._io(filename, 'saving') as path:
            if os.path.exists(path) and not os.path.isfile(path):
                raise NoteIOError(f'Error saving note {filename}: not a regular file', path)
            if os.path.exists(path) and not overwrite:
                raise CancelledError('Note creation cancelled.', path)
            note = Note(NoteHeader.new(title), body)
            self._write(path, encode_note(note))
        logger.info('Saved note %s', path)
        return filename

    def list(self) -> List[str]:
        """Returns the filenames of all notes, sorted lexicographically."""
        try:
            with os.scandir(self.directory) as entries:
                names = [e.name for e in entries if e.name.endswith(self.conf.extension) and e.is_file()]
        except OSError as e:
            raise NoteIOError(f'Error reading notes: {e}', self.directory, e)
        names.sort()
        return names

    def read(self, filename: str) -> str:
        """Returns the full content of the note file."""
        with self._io(filename, 'reading') as path:
            logger.debug('Reading note %s', path)
            with open(path, 'r', encoding='utf-8') as file:
                return file.read()

    def load(self, filename: str) -> Note:
        """Reads and parses the note.

        Raises :exc:`consolenotes.errors.InvalidFormatError` if the header is damaged.
        """
        return decode_note(self.read(filename), self.path_for(filename))

    def first_header_line(self, filename: str) -> str:
        """Returns the title to show for the note in listings.

        This is the first line of the file without its ``Title: `` prefix, truncated to
        :attr:`NotesConf.summary_width` characters. Returns ``"Untitled"`` if the file is empty or unreadable.
        """
        try:
            with open(self.path_for(filename), 'r', encoding='utf-8') as file:
                first = file.readline()
        except (OSError, UnicodeDecodeError, NoteNotFoundError) as e:
            logger.warning('Could not read title of %s: %s', filename, e)
            return UNTITLED
        if not first:
            return UNTITLED
        return summary_title(first.rstrip('\r\n'), self.conf.summary_width)

    def edit(self, filename: str, new_body: str) -> None:
        """Replaces the body of the note and updates its modified time.

        The ``Title:`` and ``Created:`` lines are kept exactly as they are. If the file's header cannot be parsed,
        :exc:`consolenotes.errors.InvalidFormatError` is raised and the file is not changed.
        """
        note = self.load(filename)
        header = replace(note.header, modified=now_timestamp())
        with self._io(filename, 'editing') as path:
            self._write(path, encode_note(Note(header, new_body)))
        logger.info('Updated note %s', path)

    def delete(self, filename: str) -> None:
        with self._io(filename, 'deleting') as path:
            os.remove(path)
        logger.info('Deleted note %s', path)

    def search(self, term: str) -> List[str]:
        """Returns the filenames of notes whose content contains the term, ignoring case.

        The whole file is searched, including the header. Files that cannot be read are skipped.
        Raises :exc:`EmptySearchTermError` if the term is blank after trimming.
        """
        term = term.strip()
        if not term:
            raise EmptySearchTermError()
        needle = term.lower()
        result = []
        for filename in self.list():
            try:
                content = self.read(filename)
            except (NoteIOError, NoteNotFoundError) as e:
                logger.warning('Skipping %s during search: %s', filename, e)
                continue
            if needle in content.lower():
                result.append(filename)
        return result
