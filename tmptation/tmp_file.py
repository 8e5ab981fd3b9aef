"""
Temporary file that remembers itself, so all of them can be deleted in one go
"""

from __future__ import annotations

import logging
import os
import pathlib
from typing import BinaryIO, Optional

from tmptation.instance_tracking import InstanceRegistry, default_registry
from tmptation.safe_deleting import SafeDeleter, default_deleter
from tmptation.misc import temp_file_tools


logger = logging.getLogger(__name__)


class TmpFile:
    '''
    A temporary file with optional initial contents.

        file = TmpFile('name', 'contents')

        file.path.exists()  # True
        file.closed         # False
        file.read()         # b'contents'

        TmpFile.delete_all()

        file.path.exists()  # False
        file.closed         # True

    The file is opened in binary mode. `str` contents are written as UTF-8.
    '''

    deleter: SafeDeleter = default_deleter
    registry: InstanceRegistry = default_registry

    def __init__(self, name: str = 'anon', body: str | bytes = '') -> None:
        fd, self._path = temp_file_tools.allocate_temp_file(prefix=name,
                                                            folder=self.deleter.temp_root)
        try:
            self.file: BinaryIO = os.fdopen(fd, 'w+b')
        except BaseException:
            os.close(fd)
            self.deleter.delete(self._path)
            raise
        try:
            self.write(body)
            self.seek(0)
        except BaseException:
            self.close()
            self.deleter.delete(self._path)
            raise
        self.registry.register(self)

    @classmethod
    def instances(cls) -> list[TmpFile]:
        return cls.registry.instances(cls)

    @classmethod
    def delete_all(cls) -> None:
        '''
        Safely delete and close every instance of this class, oldest first.

        The list of instances is emptied before anything is deleted. If one
        deletion fails, the exception propagates and the instances after it
        are neither deleted nor tracked anymore.
        '''
        instances = cls.registry.drain(cls)
        for instance in instances:
            instance.safe_delete()
            instance.close()
        logger.debug('Deleted %s instances of %s', len(instances), cls.__name__)

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def __repr__(self) -> str:
        return f'{type(self).__name__}({str(self.path)!r})'

    def __fspath__(self) -> str:
        return str(self.path)

    def safe_delete(self) -> None:
        """Delete the file from disk if it's in the temporary folder. The handle stays open."""
        self.deleter.delete(self)

    def __enter__(self) -> TmpFile:
        return self

    def __exit__(self, exception_type, exception, traceback) -> None:
        self.close()

    # File operations, forwarded to the handle

    def write(self, data: str | bytes) -> int:
        if isinstance(data, str):
            data = data.encode('utf-8')
        return self.file.write(data)

    def read(self, size: Optional[int] = -1) -> bytes:
        return self.file.read(size)

    def read_text(self, encoding: str = 'utf-8') -> str:
        return self.read().decode(encoding)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self.file.seek(offset, whence)

    def tell(self) -> int:
        return self.file.tell()

    def flush(self) -> None:
        self.file.flush()

    def fileno(self) -> int:
        return self.file.fileno()

    def close(self) -> None:
        self.file.close()

    @property
    def closed(self) -> bool:
        return self.file.closed