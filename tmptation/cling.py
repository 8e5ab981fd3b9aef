#!/usr/bin/env python
"""
CLI entry point for tmptation package
"""

from __future__ import annotations

import os
import pathlib
import sys
from typing import Optional

import click
import colorama

from tmptation.safe_deleting import SafeDeleter, UnsafeDeletion, effective_path


def _style(text: str, color: str) -> str:
    return f'{color}{colorama.Style.BRIGHT}{text}{colorama.Style.RESET_ALL}'


@click.group()
@click.option('--temp-root', type=click.Path(file_okay=False, path_type=pathlib.Path),
              envvar='TMPTATION_TEMP_ROOT', default=None,
              help='Folder to allow deleting in. Defaults to the system temporary folder.')
@click.pass_context
def cli(context: click.Context, temp_root: Optional[pathlib.Path]) -> None:
    """
    tmptation - delete temporary files and folders, and nothing else
    """
    context.obj = SafeDeleter(temp_root)


@cli.command()
@click.pass_obj
def root(deleter: SafeDeleter) -> None:
    """Print the folder that deletions are restricted to."""
    click.echo(str(deleter.temp_root))


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.pass_obj
def check(deleter: SafeDeleter, paths: tuple[str, ...]) -> None:
    """Tell whether each of PATHS may be deleted. Exits with 1 if any may not."""
    all_safe = True
    for path_string in paths:
        path = effective_path(path_string)
        if deleter.is_safe(path):
            click.echo(f'{_style("SAFE", colorama.Fore.GREEN)}   {path}')
        else:
            all_safe = False
            click.echo(f'{_style("UNSAFE", colorama.Fore.RED)} {path}')
    if not all_safe:
        sys.exit(1)


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.pass_obj
def delete(deleter: SafeDeleter, paths: tuple[str, ...]) -> None:
    """Delete PATHS recursively, stopping at the first one outside the temporary folder."""
    for path_string in paths:
        path = effective_path(path_string)
        existed = os.path.lexists(path)
        try:
            deleter.delete(path)
        except UnsafeDeletion as unsafe_deletion:
            raise click.ClickException(str(unsafe_deletion)) from unsafe_deletion
        except OSError as os_error:
            raise click.ClickException(f'Failed to delete {path}: {os_error}') from os_error
        if existed:
            click.echo(f'Deleted {path}')
        else:
            click.echo(f'Nothing to delete at {path}')


@cli.command(name='delete-contents')
@click.argument('path')
@click.pass_obj
def delete_contents(deleter: SafeDeleter, path: str) -> None:
    """Delete everything inside PATH, keeping PATH itself."""
    try:
        deleter.delete_contents(path)
    except UnsafeDeletion as unsafe_deletion:
        raise click.ClickException(str(unsafe_deletion)) from unsafe_deletion
    except FileNotFoundError as file_not_found_error:
        message = f'No such folder: {file_not_found_error.filename}'
        raise click.ClickException(message) from file_not_found_error
    except OSError as os_error:
        message = f'Failed to empty {effective_path(path)}: {os_error}'
        raise click.ClickException(message) from os_error
    click.echo(f'Emptied {effective_path(path)}')


if __name__ == "__main__":
    cli()
