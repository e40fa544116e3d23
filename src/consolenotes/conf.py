from __future__ import annotations
from dataclasses import dataclass, replace
import os.path
from typing import Optional


class ConfError(Exception):
    """Raised when the user's config file exists but does not define a usable configuration."""


@dataclass
class NotesConf:
    """Settings for the note store and the interactive menu.

    Every field has a default, so the tool works without a config file. To change settings, create
    ``~/.consolenotes.conf.py`` and assign an instance to the variable ``conf``:

    .. code-block:: python

       from consolenotes.conf import *
       conf = NotesConf(notes_dir='/home/me/Documents/notes', log_level='INFO')
    """

    notes_dir: str = 'notes'
    """Directory holding the note files. Relative paths are relative to the current working directory.

    The directory is created at startup if it does not exist.
    """

    extension: str = '.txt'
    """Suffix of note filenames. Only files with this suffix are listed or searched."""

    sentinel: str = 'END'
    """A line consisting of exactly this text ends multi-line note entry."""

    summary_width: int = 40
    """Titles longer than this are truncated (with ``...``) in the note listing."""

    log_level: str = 'WARNING'
    """Name of the :mod:`logging` level for the application's log messages."""

    log_path: Optional[str] = None
    """If set, log messages are appended to this file instead of being written to standard error."""

    @classmethod
    def config_path(cls) -> str:
        return os.path.expanduser(os.path.join('~', '.consolenotes.conf.py'))

    @classmethod
    def for_user(cls) -> NotesConf:
        """Loads the config from ``~/.consolenotes.conf.py``, or returns the defaults if that file does not exist.

        Raises :exc:`ConfError` if the file does not assign an instance of this class to ``conf``.
        """
        path = cls.config_path()
        if not os.path.exists(path):
            return cls()
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise ConfError('You need to assign an instance of NotesConf to the variable `conf` '
                            f'in your config file: {path}')
        return context['conf']

    def standardize(self) -> NotesConf:
        return replace(
            self,
            notes_dir=os.path.abspath(os.path.expanduser(self.notes_dir))
        )

    def instantiate(self):
        from consolenotes.store import NoteStore
        return NoteStore(self.standardize())
