"""
redditpaper Decorators

Use these decorators to turn plain functions into redditpaper subcommands without repeating the
boilerplate for loading configuration and reporting errors. A typical subcommand looks like:

    @click.command(name="sparkle")
    @catch_errors
    @require_config
    def cli(config: RedditpaperConfig):
        '''Make the wallpaper sparkle'''

        ...

require_config loads the config file chosen by the global --config option and hands the
resulting RedditpaperConfig to the function as its first argument. catch_errors reports any
exception through the console "fail" template and exits with status 1.
"""

import sys
from functools import wraps

import click

from redditpaper.AppState import AppState
from redditpaper.cli_utils.console import fail
from redditpaper.config import load_config


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
            raise
        except Exception as error:
            fail(str(error))
            sys.exit(1)

    return wrapper


def require_config(func):
    """
    Decorator for commands that need the configuration. Loads it once per invocation from the
    path stored on the click context and passes it as the first positional argument.
    ConfigError propagates so that nothing else runs when the config is unusable.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        state = ctx.ensure_object(AppState)

        if state.config is None:
            state.config = load_config(state.config_path)

        return func(state.config, *args, **kwargs)

    return wrapper
