"""Command-line interface for consolenotes."""


import argparse
import logging
import sys
from consolenotes.conf import ConfError, NotesConf
from consolenotes.errors import NoteError
from consolenotes.menu import LineReader, MenuController


def argparser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description='Interactive note manager. Notes are stored as plain text files in the directory configured '
                    'in ~/.consolenotes.conf.py (by default, "notes" in the current directory).')


def configure_logging(conf: NotesConf) -> None:
    logging.basicConfig(
        filename=conf.log_path,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        level=getattr(logging, conf.log_level.upper(), logging.WARNING),
    )


def main(args=None, read_line: LineReader = input) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    argparser().parse_args(args)
    try:
        conf = NotesConf.for_user()
    except ConfError as e:
        print(str(e), file=sys.stderr)
        return 1
    try:
        configure_logging(conf)
    except OSError as e:
        print(f'Error opening log file: {e}', file=sys.stderr)
        return 1
    store = conf.instantiate()
    try:
        store.ensure_directory()
        print('Notes directory is ready!')
    except NoteError as e:
        print(str(e), file=sys.stderr)

    print('Welcome to Console Notes App')
    print('============================')
    return MenuController(store, read_line=read_line, sentinel=conf.sentinel).run()
