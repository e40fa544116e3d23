import pytest
from consolenotes.conf import NotesConf


@pytest.fixture
def store(fs):
    store = NotesConf(notes_dir='/notes').instantiate()
    store.ensure_directory()
    return store
