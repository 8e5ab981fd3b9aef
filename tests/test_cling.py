from __future__ import annotations

import shutil

import pytest
from click.testing import CliRunner

from tmptation.cling import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_root(runner, temp_root):
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'root'])
    assert result.exit_code == 0
    assert result.output.strip() == str(temp_root)


def test_root_from_environment(runner, temp_root):
    result = runner.invoke(cli, ['root'], env={'TMPTATION_TEMP_ROOT': str(temp_root)})
    assert result.exit_code == 0
    assert result.output.strip() == str(temp_root)


def test_check(runner, temp_root, outside_folder):
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'check',
                                 str(temp_root / 'x')])
    assert result.exit_code == 0
    assert 'SAFE' in result.output

    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'check',
                                 str(temp_root / 'x'), str(outside_folder)])
    assert result.exit_code == 1
    assert 'UNSAFE' in result.output
    assert str(outside_folder) in result.output


def test_delete(runner, temp_root):
    folder = temp_root / 'folder'
    (folder / 'sub').mkdir(parents=True)
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete', str(folder),
                                 str(temp_root / 'missing')])
    assert result.exit_code == 0
    assert not folder.exists()


def test_delete_refuses_outside(runner, temp_root, outside_folder):
    folder = temp_root / 'folder'
    folder.mkdir()
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete',
                                 str(outside_folder), str(folder)])
    assert result.exit_code == 1
    assert 'refusing to remove' in result.output
    assert (outside_folder / 'precious.txt').exists()
    assert folder.exists()


def test_delete_contents(runner, temp_root, outside_folder):
    folder = temp_root / 'folder'
    (folder / 'sub').mkdir(parents=True)
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete-contents',
                                 str(folder)])
    assert result.exit_code == 0
    assert folder.is_dir()
    assert list(folder.iterdir()) == []

    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete-contents',
                                 str(outside_folder)])
    assert result.exit_code == 1
    assert (outside_folder / 'precious.txt').exists()

    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete-contents',
                                 str(temp_root / 'missing')])
    assert result.exit_code == 1
    assert 'No such folder' in result.output


def test_delete_reports_missing_path(runner, temp_root):
    folder = temp_root / 'folder'
    folder.mkdir()
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete', str(folder),
                                 str(temp_root / 'missing')])
    assert result.exit_code == 0
    assert f'Deleted {folder}' in result.output
    assert f'Nothing to delete at {temp_root / "missing"}' in result.output
    assert f'Deleted {temp_root / "missing"}' not in result.output


def test_delete_reports_os_errors(runner, temp_root, monkeypatch):
    folder = temp_root / 'folder'
    folder.mkdir()

    def rmtree(path, *args, **kwargs):
        raise PermissionError(13, 'Permission denied', str(path))

    monkeypatch.setattr(shutil, 'rmtree', rmtree)
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete', str(folder)])
    assert result.exit_code == 1
    assert 'Permission denied' in result.output
    assert not isinstance(result.exception, PermissionError)


def test_delete_contents_reports_os_errors(runner, temp_root, monkeypatch):
    folder = temp_root / 'folder'
    (folder / 'sub').mkdir(parents=True)

    def rmtree(path, *args, **kwargs):
        raise PermissionError(13, 'Permission denied', str(path))

    monkeypatch.setattr(shutil, 'rmtree', rmtree)
    result = runner.invoke(cli, ['--temp-root', str(temp_root), 'delete-contents',
                                 str(folder)])
    assert result.exit_code == 1
    assert 'Failed to empty' in result.output
    assert 'Permission denied' in result.output
    assert not isinstance(result.exception, PermissionError)
