"""Interactive, menu-driven interface over a :class:`consolenotes.store.NoteStore`.

The most important class is :class:`MenuController`. Input comes from a :data:`LineReader`, so the whole menu can be
driven by :class:`ScriptedInput` instead of the keyboard.
"""

from enum import Enum
import logging
import os.path
import sys
from typing import Callable, Iterable, List, Optional, TextIO

from terminaltables import AsciiTable

from consolenotes.errors import CancelledError, NoteError
from consolenotes.store import NoteStore

logger = logging.getLogger(__name__)

LineReader = Callable[[], str]
"""Returns the next line of input without its line ending. Raises :exc:`EOFError` when there is no more input."""

RULE = '═' * 31
THIN_RULE = '─' * 35
WIDE_RULE = '═' * 50
YES_ANSWERS = ('y', 'yes')


class ScriptedInput:
    """A :data:`LineReader` that returns the given lines in order, then raises :exc:`EOFError`."""
    def __init__(self, lines: Iterable[str]):
        self._lines = list(lines)
        self._pos = 0

    def __call__(self) -> str:
        if self._pos >= len(self._lines):
            raise EOFError('No more scripted input')
        line = self._lines[self._pos]
        self._pos += 1
        return line

    @property
    def remaining(self) -> List[str]:
        return self._lines[self._pos:]


def sentinel_matcher(sentinel: str) -> Callable[[str], bool]:
    return lambda line: line == sentinel


def read_until_sentinel(read_line: LineReader, is_sentinel: Callable[[str], bool]) -> List[str]:
    """Reads lines until one satisfies ``is_sentinel``. The sentinel line itself is not returned."""
    lines = []
    while True:
        line = read_line()
        if is_sentinel(line):
            return lines
        lines.append(line)


def parse_choice(text: str) -> int:
    """Converts a menu selection to an int. Anything that is not an integer becomes -1."""
    try:
        return int(text.strip())
    except ValueError:
        return -1


def is_yes(text: str) -> bool:
    return text.strip().lower() in YES_ANSWERS


class MenuState(Enum):
    MAIN_MENU = 'main_menu'
    CREATING = 'creating'
    LISTING = 'listing'
    VIEWING = 'viewing'
    EDITING = 'editing'
    SEARCHING = 'searching'
    DELETING = 'deleting'
    EXIT = 'exit'


class MenuController:
    """Runs the interactive loop: show the main menu, perform the chosen action, repeat until the user exits.

    Errors raised by the store are reported to the user and never end the loop.

    .. attribute:: state
       :type: MenuState

       The screen the controller is currently on. It is :attr:`MenuState.EXIT` once :meth:`run` returns.
    """

    def __init__(self, store: NoteStore, read_line: LineReader = input, out: Optional[TextIO] = None,
                 sentinel: str = 'END'):
        self.store = store
        self.read_line = read_line
        self.out = out
        self.sentinel = sentinel
        self.is_sentinel = sentinel_matcher(sentinel)
        self.state = MenuState.MAIN_MENU

    def _print(self, *args, **kwargs) -> None:
        print(*args, file=self.out or sys.stdout, **kwargs)

    def _prompt(self, text: str) -> str:
        self._print(text, end='', flush=True)
        return self.read_line()

    def _heading(self, title: str) -> None:
        self._print(f'\n{RULE}')
        self._print(title.center(len(RULE)).rstrip())
        self._print(RULE)

    def _report(self, error: NoteError) -> None:
        logger.info('%s: %s', type(error).__name__, error)
        self._print(f'Error: {error}')

    def run(self) -> int:
        """Runs until the user chooses Exit or input ends. Returns the exit code, which is always 0."""
        actions = {
            1: self.create_note,
            2: self.list_notes,
            3: self.search_notes,
            4: self.delete_note,
        }
        self.state = MenuState.MAIN_MENU
        try:
            while self.state != MenuState.EXIT:
                self.state = MenuState.MAIN_MENU
                self.show_main_menu()
                choice = parse_choice(self._prompt('Enter your choice (1-5): '))
                if choice == 5:
                    self.state = MenuState.EXIT
                    self._print('\nGoodbye!')
                elif choice in actions:
                    actions[choice]()
                else:
                    self._print('Invalid choice. Please try again.')
        except EOFError:
            logger.debug('Input ended; exiting')
            self.state = MenuState.EXIT
            self._print()
        return 0

    def show_main_menu(self) -> None:
        self._heading('NOTES MENU')
        self._print('1. Create New Note')
        self._print('2. View All Notes')
        self._print('3. Search Notes')
        self._print('4. Delete Note')
        self._print('5. Exit')
        self._print(RULE)

    def _read_body(self, what: str = 'note content') -> str:
        self._print(f"Enter {what} (type '{self.sentinel}' on a new line to finish):")
        self._print(THIN_RULE)
        return '\n'.join(read_until_sentinel(self.read_line, self.is_sentinel))

    def create_note(self) -> None:
        self.state = MenuState.CREATING
        self._heading('CREATE NEW NOTE')
        title = self._prompt('Enter note title: ').strip()
        try:
            filename = self.store.filename_for(title)
        except NoteError as e:
            self._report(e)
            return
        body = self._read_body()
        try:
            overwrite = False
            if self.store.exists(filename):
                overwrite = is_yes(self._prompt('Note with this name exists. Overwrite? (y/n): '))
            filename = self.store.create(title, body, overwrite=overwrite)
        except CancelledError as e:
            self._print(e.message)
            return
        except NoteError as e:
            self._report(e)
            return
        self._print(f'Note saved successfully: {filename}')
        self._print(f'Location: {self.store.path_for(filename)}')

    def _choose(self, filenames: List[str], prompt: str) -> Optional[str]:
        choice = parse_choice(self._prompt(prompt))
        if 0 < choice <= len(filenames):
            return filenames[choice - 1]
        return None

    def _numbered_table(self, filenames: List[str]) -> str:
        data = [('#', 'Note')] + [(str(i), name) for i, name in enumerate(filenames, 1)]
        table = AsciiTable(data)
        table.justify_columns[0] = 'right'
        return table.table

    def list_notes(self) -> None:
        self.state = MenuState.LISTING
        self._heading('YOUR NOTES')
        try:
            filenames = self.store.list()
        except NoteError as e:
            self._report(e)
            return
        if not filenames:
            self._print('No notes found. Create your first note!')
            return
        self._print(f'Found {len(filenames)} note(s):')
        data = [('#', 'Note', 'Title')]
        for i, filename in enumerate(filenames, 1):
            name = os.path.splitext(filename)[0]
            data.append((str(i), name, self.store.first_header_line(filename)))
        table = AsciiTable(data)
        table.justify_columns[0] = 'right'
        self._print(table.table)
        selected = self._choose(filenames, '\nEnter note number to view (0 to go back): ')
        if selected:
            self.view_note(selected)

    def search_notes(self) -> None:
        self.state = MenuState.SEARCHING
        self._heading('SEARCH NOTES')
        term = self._prompt('Enter search term: ')
        try:
            filenames = self.store.search(term)
        except NoteError as e:
            self._report(e)
            return
        if not filenames:
            self._print(f'No notes found containing: "{term.strip()}"')
            return
        self._print(f'\nFound {len(filenames)} note(s) containing "{term.strip()}":')
        self._print(self._numbered_table(filenames))
        selected = self._choose(filenames, '\nEnter note number to view (0 to go back): ')
        if selected:
            self.view_note(selected)

    def view_note(self, filename: str) -> None:
        self.state = MenuState.VIEWING
        try:
            content = self.store.read(filename)
        except NoteError as e:
            self._report(e)
            return
        self._print(f'\n{WIDE_RULE}')
        self._print(content.rstrip('\n'))
        self._print(WIDE_RULE)
        self._print('\nOptions:')
        self._print('1. Edit this note')
        self._print('2. Delete this note')
        self._print('3. Back to list')
        choice = parse_choice(self._prompt('Choose (1-3): '))
        if choice == 1:
            self.edit_note(filename)
        elif choice == 2:
            self.confirm_delete(filename)

    def edit_note(self, filename: str) -> None:
        self.state = MenuState.EDITING
        try:
            note = self.store.load(filename)
        except NoteError as e:
            self._report(e)
            return
        self._print('\nCurrent content:')
        self._print(THIN_RULE)
        self._print(note.body)
        self._print()
        body = self._read_body('new content')
        try:
            self.store.edit(filename, body)
        except NoteError as e:
            self._report(e)
            return
        self._print('Note updated successfully!')

    def delete_note(self) -> None:
        self.state = MenuState.DELETING
        self._heading('DELETE NOTE')
        try:
            filenames = self.store.list()
        except NoteError as e:
            self._report(e)
            return
        if not filenames:
            self._print('No notes to delete.')
            return
        self._print('Select note to delete:')
        self._print(self._numbered_table(filenames))
        selected = self._choose(filenames, '\nEnter note number to delete (0 to cancel): ')
        if selected:
            self.confirm_delete(selected)

    def confirm_delete(self, filename: str) -> None:
        self.state = MenuState.DELETING
        if not is_yes(self._prompt(f"\nAre you sure you want to delete '{filename}'? (y/n): ")):
            self._print('Deletion cancelled.')
            return
        try:
            self.store.delete(filename)
        except NoteError as e:
            self._report(e)
            return
        self._print('Note deleted successfully!')
