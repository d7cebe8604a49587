"""
redditpaper CLI Utilities

This module contains utilities for working across Click subcommands: importing subcommands
from the subcommands directory and attaching them to the entry point group.
"""

import inspect
import importlib
from pathlib import Path
from collections.abc import Iterable

import click

import redditpaper.subcommands

from redditpaper.cli_utils.console import warn

SUBCOMMANDS_PACKAGE = "redditpaper.subcommands"


def import_commands(module_paths: Iterable = None) -> list[click.Command]:
    """
    Retrieve a set of click Commands from module_paths. Default is every module in the built in
    subcommands directory for commands that come pre-installed with redditpaper.

    A valid redditpaper command module defines a "cli" function that is wrapped as a click Command
    object. Set the 'name' keyword argument in the @click.command decorator to set the name of
    the command intended for the end user.
    """

    if module_paths is None:
        module_paths = sorted(Path(redditpaper.subcommands.__file__).parent.glob("*.py"))

    commands = []

    for path in module_paths:
        name = inspect.getmodulename(str(path))
        if name is None or name == "__init__":
            continue

        module = importlib.import_module(f"{SUBCOMMANDS_PACKAGE}.{name}")

        try:
            cli = getattr(module, "cli")
            commands.append(cli)

        except AttributeError:
            warn(f"Cannot add command {name}: no 'cli' function found.")

    return commands


def attach_commands(group: click.Group, commands: list[click.Command]):
    """
    Attach each command in a list of click Command objects to a provided group. Useful when
    retrieving a dynamic list of subcommands with import_commands().
    """

    for command in commands:
        group.add_command(command)
