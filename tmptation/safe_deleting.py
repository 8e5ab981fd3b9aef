"""
Guarded deletion - refuse to remove anything outside the temporary folder

`SafeDeleter` checks a path against the temporary folder before removing it,
so a buggy test can't wipe out a home folder or a project checkout:

    deleter = SafeDeleter()
    deleter.delete(pathlib.Path(tempfile.mkdtemp()))  # Removed.
    deleter.delete(pathlib.Path.home())               # Raises `UnsafeDeletion`.

The check is a plain string prefix match. With a temporary folder of `/tmp`,
the path `/tmpfoo` is considered safe too. Code depends on that exact behavior,
so don't put a path boundary in without going through everyone who uses this.

This is a guard against mistakes in cooperative code, not a sandbox. Nothing
stops the filesystem from changing between the check and the removal.
"""

from __future__ import annotations

import logging
import os
import pathlib
import shutil
import stat
from typing import Any, Optional

from tmptation.misc import path_tools


logger = logging.getLogger(__name__)


class UnsafeDeletion(Exception):
    """Raised when asked to delete a path that isn't in the temporary folder."""

    def __init__(self, path: pathlib.Path) -> None:
        self.path = path
        super().__init__(f"refusing to remove non-tmp path '{path}'")


def effective_path(resource: Any) -> pathlib.Path:
    '''
    Get the absolute path that deleting `resource` would remove.

    Uses `resource.path` if it exists, otherwise `str(resource)`. Relative
    paths are expanded against the current working directory.
    '''
    path = resource.path if hasattr(resource, 'path') else str(resource)
    return path_tools.expand_path(path)


def _remove_entry_secure(path: pathlib.Path) -> None:
    # `lstat` so a symlink is removed as itself and never followed.
    if stat.S_ISDIR(path.lstat().st_mode):
        shutil.rmtree(path)
    else:
        os.unlink(path)


class SafeDeleter:
    """Deletes paths, but only ones living inside `temp_root`."""

    def __init__(self, temp_root: Optional[pathlib.Path | str] = None) -> None:
        self.temp_root: pathlib.Path = (path_tools.temp_root() if temp_root is None
                                        else path_tools.expand_path(temp_root))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({str(self.temp_root)!r})'

    def is_safe(self, path: pathlib.Path | str) -> bool:
        return str(path).startswith(str(self.temp_root))

    def check(self, resource: Any) -> pathlib.Path:
        """Get the effective path of `resource`, raising if it's not safe to delete."""
        path = effective_path(resource)
        if not self.is_safe(path):
            logger.warning('Refused to remove %s, it is outside %s', path, self.temp_root)
            raise UnsafeDeletion(path)
        return path

    def delete(self, resource: Any) -> None:
        '''
        Delete the path of `resource`, recursively if it's a folder.

        A path that doesn't exist counts as deleted already. Any other `OSError`
        is raised as is.
        '''
        path = self.check(resource)
        try:
            _remove_entry_secure(path)
        except FileNotFoundError:
            logger.debug('Nothing to remove at %s', path)
        else:
            logger.debug('Removed %s', path)

    def delete_contents(self, resource: Any) -> None:
        '''
        Delete everything inside the folder of `resource`, keeping the folder.

        Unlike `delete`, a missing folder raises `FileNotFoundError`.
        '''
        path = self.check(resource)
        for child in path.iterdir():
            _remove_entry_secure(child)
        logger.debug('Emptied %s', path)


default_deleter = SafeDeleter()


def is_safe(path: pathlib.Path | str) -> bool:
    return default_deleter.is_safe(path)


def guarded_delete(resource: Any) -> None:
    default_deleter.delete(resource)


def guarded_delete_contents(resource: Any) -> None:
    default_deleter.delete_contents(resource)
