"""
Temporary folder that behaves like a path, and can be deleted along with all its siblings
"""

from __future__ import annotations

import logging
import os
import pathlib
from typing import Iterator

from tmptation.instance_tracking import InstanceRegistry, default_registry
from tmptation.safe_deleting import SafeDeleter, default_deleter
from tmptation.misc import temp_file_tools


logger = logging.getLogger(__name__)


class TmpDir:
    '''
    A temporary folder, usable most places a `pathlib.Path` is.

        folder = TmpDir()
        folder.exists()  # True

        TmpDir.delete_all()
        folder.exists()  # False

    Only the path operations below are forwarded to `path`. Anything else, use
    `folder.path` directly.
    '''

    deleter: SafeDeleter = default_deleter
    registry: InstanceRegistry = default_registry

    def __init__(self, prefix: str = 'TmpDir-') -> None:
        self.path: pathlib.Path = temp_file_tools.allocate_temp_folder(
            prefix=prefix, folder=self.deleter.temp_root
        )
        self.registry.register(self)

    @classmethod
    def instances(cls) -> list[TmpDir]:
        return cls.registry.instances(cls)

    @classmethod
    def delete_all(cls) -> None:
        '''
        Safely delete every instance of this class, with everything inside them.

        The list of instances is emptied first. If one deletion fails, the
        instances after it are left on disk and untracked.
        '''
        instances = cls.registry.drain(cls)
        for instance in instances:
            instance.safe_delete()
        logger.debug('Deleted %s instances of %s', len(instances), cls.__name__)

    def safe_delete(self) -> None:
        self.deleter.delete(self)

    def empty(self) -> None:
        """Delete everything inside the folder, keeping the folder itself."""
        self.deleter.delete_contents(self)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({str(self.path)!r})'

    def __str__(self) -> str:
        return str(self.path)

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TmpDir):
            return self.path == other.path
        if isinstance(other, pathlib.PurePath):
            return self.path == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.path)

    def __truediv__(self, string_or_pathlike: str | os.PathLike) -> pathlib.Path:
        return self.path / string_or_pathlike

    def joinpath(self, *segments: str | os.PathLike) -> pathlib.Path:
        return self.path.joinpath(*segments)

    def exists(self) -> bool:
        return self.path.exists()

    def is_dir(self) -> bool:
        return self.path.is_dir()

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def parent(self) -> pathlib.Path:
        return self.path.parent

    def relative_to(self, other: str | os.PathLike) -> pathlib.Path:
        return self.path.relative_to(other)

    def iterdir(self) -> Iterator[pathlib.Path]:
        return self.path.iterdir()
