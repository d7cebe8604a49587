"""
AppState

This module defines the AppState dataclass, which is stored on the click context object and
carries the global options of a redditpaper invocation to its subcommands. The config is loaded
lazily by the first command that asks for it, so commands such as 'init' work without an
existing config file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from redditpaper.config import RedditpaperConfig


@dataclass
class AppState:
    """
    Application data passed around subcommands: where to read the config from and, once
    loaded, the config itself.
    """

    config_path: Optional[Path] = None  # None means the default location
    config: Optional[RedditpaperConfig] = None
    verbosity: str = "normal"
