import logging
import os.path
from pathlib import Path
from consolenotes import cli
from consolenotes.menu import ScriptedInput


def cli_setup(fs, conf=None):
    fs.cwd = '/work'
    Path(fs.cwd).mkdir(parents=True)
    Path('~').expanduser().mkdir(parents=True)
    if conf is not None:
        Path('~/.consolenotes.conf.py').expanduser().write_text(conf)


def test_main_defaults(fs, capsys):
    cli_setup(fs)
    assert cli.main([], read_line=ScriptedInput(['5'])) == 0
    out, err = capsys.readouterr()
    assert 'Notes directory is ready!' in out
    assert 'Welcome to Console Notes App' in out
    assert 'Goodbye!' in out
    assert err == ''
    assert os.path.isdir('/work/notes')


def test_main_full_session(fs, capsys):
    cli_setup(fs)
    lines = ['1', 'Shopping', 'eggs', 'milk', 'END',
             '3', 'MILK', '1', '1', 'bread', 'END',
             '5']
    assert cli.main([], read_line=ScriptedInput(lines)) == 0
    out, err = capsys.readouterr()
    assert 'Note saved successfully: Shopping.txt' in out
    assert 'Note updated successfully!' in out
    text = Path('/work/notes/Shopping.txt').read_text()
    assert text.startswith('Title: Shopping\nCreated: ')
    assert text.endswith('\nbread\n')


def test_main_end_of_input(fs, capsys):
    cli_setup(fs)
    assert cli.main([], read_line=ScriptedInput([])) == 0


def test_main_user_conf(fs, capsys):
    cli_setup(fs, """
from consolenotes.conf import *
conf = NotesConf(notes_dir='/elsewhere/notes', sentinel='.')
""")
    assert cli.main([], read_line=ScriptedInput(['1', 'Note', 'END', '.', '5'])) == 0
    assert Path('/elsewhere/notes/Note.txt').read_text().endswith('\nEND\n')
    assert not os.path.exists('/work/notes')


def test_main_bad_conf(fs, capsys):
    cli_setup(fs, 'conf = 5')
    assert cli.main([], read_line=ScriptedInput(['5'])) == 1
    out, err = capsys.readouterr()
    assert 'You need to assign an instance of NotesConf' in err
    assert 'NOTES MENU' not in out


def test_main_directory_failure_continues(fs, capsys):
    cli_setup(fs, """
from consolenotes.conf import *
conf = NotesConf(notes_dir='/blocked/notes')
""")
    fs.create_file('/blocked')
    assert cli.main([], read_line=ScriptedInput(['2', '5'])) == 0
    out, err = capsys.readouterr()
    assert 'Error creating notes directory' in err
    assert 'Notes directory is ready!' not in out
    assert 'Error: Error reading notes' in out
    assert 'Goodbye!' in out


def test_configure_logging(mocker):
    basic_config = mocker.patch('logging.basicConfig')
    cli.configure_logging(cli.NotesConf(log_level='info', log_path='/tmp/notes.log'))
    kwargs = basic_config.call_args[1]
    assert kwargs['level'] == logging.INFO
    assert kwargs['filename'] == '/tmp/notes.log'


def test_configure_logging_unknown_level(mocker):
    basic_config = mocker.patch('logging.basicConfig')
    cli.configure_logging(cli.NotesConf(log_level='chatty'))
    assert basic_config.call_args[1]['level'] == logging.WARNING


def test_main_log_file_failure(fs, capsys, mocker):
    cli_setup(fs, """
from consolenotes.conf import *
conf = NotesConf(log_path='/missing/dir/notes.log')
""")
    mocker.patch('logging.basicConfig', side_effect=FileNotFoundError(2, 'No such file or directory'))
    assert cli.main([], read_line=ScriptedInput(['5'])) == 1
    out, err = capsys.readouterr()
    assert 'Error opening log file' in err
    assert 'NOTES MENU' not in out
