"""
redditpaper Configuration Management

This file handles loading configuration variables from a JSON config file and generating a
default one. RedditpaperConfig is loaded once per run, before any network activity, and is
immutable afterwards. Raise a ConfigError for any issue that arises in reading or validating
the file.

The configuration file is "config.json" and lives at ~/.reddit-wallpaper/config.json unless the
REDDITPAPER_CONFIG_DIR environment variable points somewhere else. Every field is optional:
user values are merged over the defaults field by field.
"""

import json
import logging
import os
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Optional

from redditpaper.links import Resolution

logger = logging.getLogger(__name__)

SORTS = frozenset({"hot", "new", "top", "rising", "controversial"})
TIME_FILTERS = frozenset({"hour", "day", "week", "month", "year", "all"})

CONFIG_FILE_NAME = "config.json"
DEFAULT_CONFIG_DIR = Path("~/.reddit-wallpaper")

# json key -> dataclass field. "score" and "resolution" are the older spellings.
JSON_KEYS = {
    "subreddits": "subreddits",
    "sort": "sort",
    "from": "time_filter",
    "minScore": "min_score",
    "score": "min_score",
    "domains": "domains",
    "types": "types",
    "shuffle": "shuffle",
    "directory": "directory",
    "minResolution": "min_resolution",
    "resolution": "min_resolution",
}


class ConfigError(Exception):
    """Raise when an issue occurs with handling redditpaper configuration."""

    pass


@dataclass(frozen=True)
class RedditpaperConfig:
    """
    Settings for one redditpaper run. Build it with from_dict() when the values come from
    a deserialized json object so that names, types and casing are normalized in one place.
    """

    subreddits: tuple = ("wallpaper", "wallpapers", "castles")
    sort: str = "top"
    time_filter: str = "month"
    min_score: int = 100
    domains: frozenset = frozenset({"i.imgur.com", "imgur.com"})
    types: frozenset = frozenset({"png", "jpg", "jpeg"})
    shuffle: bool = True
    directory: Path = field(
        default_factory=lambda: DEFAULT_CONFIG_DIR.expanduser().resolve()
    )
    min_resolution: Optional[Resolution] = Resolution(1920, 1080)

    @classmethod
    def from_dict(cls, data: dict) -> "RedditpaperConfig":
        """
        Merge a partial json document over the defaults. Raise ConfigError for values
        of the wrong shape.
        """

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config must be a json object, got {type(data).__name__}."
            )

        values = {}
        for key, value in data.items():
            try:
                name = JSON_KEYS[key]
            except KeyError:
                logger.warning("ignoring unknown config key '%s'", key)
                continue

            values[name] = value

        parsers = {
            "subreddits": _parse_subreddits,
            "sort": _parse_sort,
            "time_filter": _parse_time_filter,
            "min_score": _parse_min_score,
            "domains": _parse_lowercase_set,
            "types": _parse_lowercase_set,
            "shuffle": _parse_shuffle,
            "directory": _parse_directory,
            "min_resolution": _parse_resolution,
        }

        kwargs = {name: parsers[name](value, name) for name, value in values.items()}
        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Serialize back to the json key layout read by from_dict()."""

        return {
            "subreddits": list(self.subreddits),
            "sort": self.sort,
            "from": self.time_filter,
            "minScore": self.min_score,
            "domains": sorted(self.domains),
            "types": sorted(self.types),
            "shuffle": self.shuffle,
            "directory": str(self.directory),
            "minResolution": (
                self.min_resolution._asdict() if self.min_resolution else None
            ),
        }

    def generate_config_json(self, dest_file: Path = None) -> Path:
        """
        Write the config as json to dest_file (default: config.json in the configuration directory).
        Returns the path of the written file.

        Warning: will overwrite any existing config file, callers check for one first.
        """

        dest_file = Path(dest_file or get_config_dir() / CONFIG_FILE_NAME).expanduser()

        try:
            to_json = json.dumps(self.to_dict(), sort_keys=True, indent=4)
        except TypeError as error:
            raise ConfigError(f"There was an error serializing config data: {error}")

        try:
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            dest_file.write_text(to_json, encoding="utf-8")
        except OSError as error:
            raise ConfigError(f"There was an error saving the configuration file: {error}.")

        return dest_file


def _parse_subreddits(value, name) -> tuple:
    if not isinstance(value, list) or not value:
        raise ConfigError(f"'{name}' must be a non-empty list of subreddit names.")

    for subreddit in value:
        if not isinstance(subreddit, str) or not subreddit.strip():
            raise ConfigError(f"'{name}' contains an invalid subreddit name: {subreddit!r}")

    return tuple(subreddit.strip().lower() for subreddit in value)


def _parse_sort(value, name) -> str:
    if not isinstance(value, str) or value.lower() not in SORTS:
        raise ConfigError(f"'sort' must be one of {', '.join(sorted(SORTS))}, got {value!r}.")
    return value.lower()


def _parse_time_filter(value, name) -> str:
    if not isinstance(value, str) or value.lower() not in TIME_FILTERS:
        raise ConfigError(
            f"'from' must be one of {', '.join(sorted(TIME_FILTERS))}, got {value!r}."
        )
    return value.lower()


def _parse_min_score(value, name) -> int:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"'minScore' must be an integer >= 0, got {value!r}.")
    return value


def _parse_lowercase_set(value, name) -> frozenset:
    if value is None:
        return frozenset()

    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{name}' must be a list of strings.")

    return frozenset(item.strip().lower() for item in value)


def _parse_shuffle(value, name) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'shuffle' must be true or false, got {value!r}.")
    return value


def _parse_directory(value, name) -> Path:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'directory' must be a path, got {value!r}.")
    return Path(value).expanduser().resolve()


def _parse_resolution(value, name) -> Optional[Resolution]:
    if value is None:
        return None

    try:
        width, height = value["width"], value["height"]
    except (TypeError, KeyError):
        raise ConfigError(
            f"'minResolution' must look like {{\"width\": 1920, \"height\": 1080}}, got {value!r}."
        )

    for dimension in (width, height):
        if isinstance(dimension, bool) or not isinstance(dimension, int) or dimension < 0:
            raise ConfigError(f"'minResolution' dimensions must be integers >= 0, got {value!r}.")

    return Resolution(width, height)


def get_config_dir() -> Path:
    """
    Return the configuration directory, REDDITPAPER_CONFIG_DIR if set or else ~/.reddit-wallpaper.
    """

    try:
        return Path(os.environ["REDDITPAPER_CONFIG_DIR"]).expanduser()
    except KeyError:
        return DEFAULT_CONFIG_DIR.expanduser()


def load_config(config_src: Path = None) -> RedditpaperConfig:
    """
    Load config.json from config_src (default: the configuration directory) and merge it over
    the defaults. Raise ConfigError if the file can't be read or holds invalid values.
    """

    if config_src is None:
        config_src = get_config_dir() / CONFIG_FILE_NAME

    config_src = Path(config_src).expanduser()

    try:
        with config_src.open("r", encoding="utf-8") as file:
            from_json = json.loads(file.read())

    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise ConfigError(f"There was an issue reading the config {config_src}: {error}")

    except OSError as error:
        raise ConfigError(f"There was an issue opening the config: {error}")

    config = RedditpaperConfig.from_dict(from_json)
    logger.debug("loaded config from %s: %s", config_src, config)
    return config
