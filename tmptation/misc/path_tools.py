from __future__ import annotations

import os
import pathlib
import tempfile


def expand_path(path: str | os.PathLike) -> pathlib.Path:
    '''
    Expand `~` and make `path` absolute against the current working directory.

    `..` segments are collapsed textually. Symlinks are not resolved and the
    filesystem is never touched.
    '''
    return pathlib.Path(os.path.abspath(os.path.expanduser(os.fspath(path))))


def temp_root() -> pathlib.Path:
    """Get the system's temporary folder as an absolute path."""
    return expand_path(tempfile.gettempdir())
