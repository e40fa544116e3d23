import os.path
from pathlib import Path
import pytest
from consolenotes.conf import ConfError, NotesConf
from consolenotes.store import NoteStore


def test_for_user_no_file(fs):
    assert NotesConf.for_user() == NotesConf()


def test_for_user(fs):
    confpy = """from consolenotes.conf import *
conf = NotesConf(notes_dir='/my/notes', summary_width=20)"""
    fs.create_file(os.path.expanduser('~/.consolenotes.conf.py'), contents=confpy)
    assert NotesConf.for_user() == NotesConf(notes_dir='/my/notes', summary_width=20)


def test_for_user_without_conf(fs):
    fs.create_file(os.path.expanduser('~/.consolenotes.conf.py'), contents='notes_dir = "/my/notes"')
    with pytest.raises(ConfError, match=r'You need to assign .*\.consolenotes\.conf\.py'):
        NotesConf.for_user()


def test_defaults():
    conf = NotesConf()
    assert conf.notes_dir == 'notes'
    assert conf.extension == '.txt'
    assert conf.sentinel == 'END'
    assert conf.summary_width == 40


def test_standardize(fs):
    fs.cwd = '/somewhere'
    Path(fs.cwd).mkdir()
    assert NotesConf().standardize().notes_dir == '/somewhere/notes'
    assert NotesConf(notes_dir='/abs').standardize().notes_dir == '/abs'


def test_instantiate(fs):
    fs.cwd = '/somewhere'
    Path(fs.cwd).mkdir()
    store = NotesConf(notes_dir='sub/notes').instantiate()
    assert isinstance(store, NoteStore)
    assert store.directory == '/somewhere/sub/notes'
