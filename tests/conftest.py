from __future__ import annotations

import pathlib

import pytest

from tmptation import SafeDeleter, default_registry


@pytest.fixture(autouse=True)
def fresh_default_registry():
    default_registry.reset()
    yield
    default_registry.reset()


@pytest.fixture
def temp_root(tmp_path: pathlib.Path) -> pathlib.Path:
    folder = tmp_path / 'root'
    folder.mkdir()
    return folder


@pytest.fixture
def outside_folder(tmp_path: pathlib.Path) -> pathlib.Path:
    '''A folder with some contents that `deleter` must never touch.'''
    folder = tmp_path / 'outside'
    folder.mkdir()
    (folder / 'precious.txt').write_text('do not delete')
    return folder


@pytest.fixture
def deleter(temp_root: pathlib.Path) -> SafeDeleter:
    return SafeDeleter(temp_root)
