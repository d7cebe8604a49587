"""
conftest.py

Test configuration for redditpaper tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite. Fixtures used within only a single module are defined
directly in that module. Conftest.py should only be used for universal
fixtures.
"""

from pathlib import Path

import pytest
from PIL import Image

from redditpaper.config import RedditpaperConfig
from redditpaper.links import Link
from redditpaper.links import parse_resolution
from redditpaper.links import parse_type


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch) -> Path:
    """
    Point REDDITPAPER_CONFIG_DIR at an empty temporary directory so no test ever reads or
    writes the real ~/.reddit-wallpaper.
    """

    directory = tmp_path / "config"
    monkeypatch.setenv("REDDITPAPER_CONFIG_DIR", str(directory))
    return directory


@pytest.fixture(scope="session")
def test_image(tmp_path_factory) -> Path:
    """
    Return the path of a small jpeg generated with Pillow.
    """

    path = tmp_path_factory.mktemp("img") / "test_image.jpg"
    Image.new("RGB", (16, 9), color=(40, 90, 160)).save(path, format="JPEG")
    return path


@pytest.fixture
def image_bytes(test_image) -> bytes:
    return test_image.read_bytes()


@pytest.fixture
def config(tmp_path) -> RedditpaperConfig:
    """Default config downloading into a temporary directory."""

    return RedditpaperConfig(directory=tmp_path / "wallpapers")


@pytest.fixture
def make_link():
    """
    Factory for Link objects. Type and resolution are derived from url and title the same way
    the normalizer does it.
    """

    def inner(
        url="https://i.imgur.com/abc123.jpg",
        score=500,
        title="Mountains at dawn [3840 x 2160]",
        domain="i.imgur.com",
        subreddit="wallpaper",
        author="someone",
        permalink="/r/wallpaper/comments/abc123/mountains_at_dawn/",
        created_utc=1_600_000_000.0,
    ) -> Link:
        return Link(
            url=url,
            subreddit=subreddit,
            permalink=permalink,
            title=title,
            author=author,
            score=score,
            created_utc=created_utc,
            domain=domain,
            file_type=parse_type(url),
            resolution=parse_resolution(title),
        )

    return inner


@pytest.fixture
def make_listing():
    """
    Factory for decoded reddit listing documents. Each post is a dict of the "data" fields of
    a t3 child.
    """

    def inner(*posts, kind="Listing", child_kind="t3") -> dict:
        return {
            "kind": kind,
            "data": {
                "children": [{"kind": child_kind, "data": post} for post in posts],
            },
        }

    return inner


@pytest.fixture
def post():
    """Factory for the data bag of a raw reddit link post."""

    def inner(**overrides) -> dict:
        data = {
            "url": "https://i.imgur.com/abc123.jpg",
            "subreddit": "wallpaper",
            "permalink": "/r/wallpaper/comments/abc123/mountains_at_dawn/",
            "title": "Mountains at dawn [3840 x 2160]",
            "author": "someone",
            "score": 500,
            "created_utc": 1_600_000_000.0,
            "domain": "i.imgur.com",
        }
        data.update(overrides)
        return data

    return inner
