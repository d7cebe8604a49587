"""
Test wallpaper_handler

Validate that updates to the desktop background are performed correctly. subprocess.run is
patched so the tests never touch the real desktop settings.

*** Fixtures ***
- test_image (defined in conftest.py)
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

# following entities are tested in this module:
from redditpaper.wallpaper_handler import quote_applescript
from redditpaper.wallpaper_handler import update_wallpaper
from redditpaper.wallpaper_handler import WallpaperSetError


@patch("redditpaper.wallpaper_handler.sys.platform", "linux")
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_gnome(fake_run, test_image):
    update_wallpaper(test_image)

    commands = [call.args[0] for call in fake_run.call_args_list]
    uri = test_image.resolve().as_uri()
    assert commands == [
        ["gsettings", "set", "org.gnome.desktop.background", "picture-uri", uri],
        ["gsettings", "set", "org.gnome.desktop.background", "picture-uri-dark", uri],
    ]


@patch("redditpaper.wallpaper_handler.sys.platform", "linux")
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_gnome_without_dark_key(fake_run, test_image):
    fake_run.side_effect = [
        subprocess.CompletedProcess(args=[], returncode=0),
        subprocess.CalledProcessError(cmd="gsettings", returncode=1),
    ]

    update_wallpaper(test_image)

    assert fake_run.call_count == 2


@patch("redditpaper.wallpaper_handler.sys.platform", "linux")
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_failure_gsettings(fake_run, test_image):
    fake_run.side_effect = subprocess.CalledProcessError(cmd="gsettings", returncode=1)

    with pytest.raises(WallpaperSetError):
        update_wallpaper(test_image)


@patch("redditpaper.wallpaper_handler.sys.platform", "linux")
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_failure_no_gsettings(fake_run, test_image):
    fake_run.side_effect = FileNotFoundError("gsettings")

    with pytest.raises(WallpaperSetError):
        update_wallpaper(test_image)


@patch("redditpaper.wallpaper_handler.sys.platform", "darwin")
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_macos(fake_run, test_image):
    update_wallpaper(test_image)

    command = fake_run.call_args.args[0]
    assert command[:2] == ["osascript", "-e"]
    assert str(test_image.resolve()) in command[2]


@patch("redditpaper.wallpaper_handler.sys.platform", "darwin")
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_macos_quotes_path(fake_run, tmp_path, image_bytes):
    img_path = tmp_path / 'my "best" walls' / "abc.jpg"
    img_path.parent.mkdir()
    img_path.write_bytes(image_bytes)

    update_wallpaper(img_path)

    script = fake_run.call_args.args[0][2]
    assert script.endswith(quote_applescript(str(img_path.resolve())))
    assert '\\"best\\"' in script


@pytest.mark.parametrize(
    ["text", "expected"],
    [
        ("plain", '"plain"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("back\\slash", '"back\\\\slash"'),
    ],
)
def test_quote_applescript(text, expected):
    assert quote_applescript(text) == expected


@patch("redditpaper.wallpaper_handler.sys.platform", "sunos5")
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_unsupported_platform(fake_run, test_image):
    with pytest.raises(WallpaperSetError):
        update_wallpaper(test_image)

    fake_run.assert_not_called()


@pytest.mark.parametrize(
    "img_path",
    [
        "",
        "/not/a/real/absolute/path.jpg",
        42,
        None,
    ],
)
@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_failure(fake_run, img_path):
    """
    Verify that update_wallpaper raises the appropriate error type for invalid inputs:
    - empty path
    - invalid path
    - invalid data types
    """

    with pytest.raises(WallpaperSetError):
        update_wallpaper(img_path)

    fake_run.assert_not_called()


@patch("redditpaper.wallpaper_handler.subprocess.run", autospec=True)
def test_update_background_failure_not_an_image(fake_run, tmp_path):
    txt_path = tmp_path / "not_an_image.jpg"
    txt_path.write_text("definitely not an image")

    with pytest.raises(WallpaperSetError):
        update_wallpaper(txt_path)

    fake_run.assert_not_called()
