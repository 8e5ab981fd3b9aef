"""
Temporary file utilities for tmptation
"""

from __future__ import annotations

import logging
import os
import pathlib
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

from tmptation.safe_deleting import guarded_delete


logger = logging.getLogger(__name__)


def allocate_temp_file(prefix: str = tempfile.template,
                       folder: Optional[pathlib.Path | str] = None) -> tuple[int, pathlib.Path]:
    '''
    Create a new, empty file with a unique name and return its descriptor and path.

    The file is created in `folder`, or in the system's temporary folder if
    `folder` is `None`. The caller owns the descriptor.
    '''
    fd, path_string = tempfile.mkstemp(prefix=prefix, dir=folder)
    path = pathlib.Path(os.path.abspath(path_string))
    logger.debug('Allocated temp file %s', path)
    return fd, path


def allocate_temp_folder(prefix: str = tempfile.template, suffix: str = '',
                         folder: Optional[pathlib.Path | str] = None) -> pathlib.Path:
    """Create a new, empty folder with a unique name and return its absolute path."""
    path = pathlib.Path(os.path.abspath(tempfile.mkdtemp(prefix=prefix, suffix=suffix,
                                                         dir=folder)))
    logger.debug('Allocated temp folder %s', path)
    return path


@contextmanager
def create_temp_folder(prefix: str = tempfile.template, suffix: str = '') -> Iterator[pathlib.Path]:
    '''
    Context manager that creates a temporary folder and deletes it after usage.

    After the suite finishes, the temporary folder and all its files and
    subfolders will be deleted, refusing to do so if the folder somehow ended
    up outside the temporary folder.
    '''
    temp_folder = allocate_temp_folder(prefix=prefix, suffix=suffix)
    try:
        yield temp_folder
    finally:
        guarded_delete(temp_folder)
