"""Keeps personal notes as plain text files in a local directory.

If you installed via ``pip``, run ``consolenotes`` to open the interactive menu.
Or, run ``python3 -m consolenotes``.

To use the Python API, look at :class:`consolenotes.store.NoteStore`
"""
