"""
Tests for reddit_handler.py

Validate listing url construction and the error handling of listing fetches.

*** MOCKING REQUEST CALLS ***

As in the image handler tests, the get() method from the requests module is patched with a
MagicMock so no network call is executed. The mocked response is configured per test with the
behavior the test needs: a json body, an HTTPError side effect, an undecodable body etc.
"""

import dataclasses
import unittest.mock

import pytest
from requests import HTTPError
from requests.exceptions import RequestException

# following entities are tested in this module:
from redditpaper.reddit_handler import FetchError
from redditpaper.reddit_handler import fetch_listing
from redditpaper.reddit_handler import fetch_listings
from redditpaper.reddit_handler import listing_url


def test_listing_url():
    assert (
        listing_url("wallpaper", "top", "month")
        == "https://reddit.com/r/wallpaper/top.json?t=month"
    )


@unittest.mock.patch("redditpaper.reddit_handler.requests.get", autospec=True)
def test_fetch_listing_success(mock_get, make_listing, post):
    listing = make_listing(post())
    mock_get.return_value.json.return_value = listing

    assert fetch_listing("castles", "hot", "day") == listing

    args, kwargs = mock_get.call_args
    assert args[0] == "https://reddit.com/r/castles/hot.json?t=day"
    assert "User-Agent" in kwargs["headers"]
    assert kwargs["timeout"]


@unittest.mock.patch("redditpaper.reddit_handler.requests.get", autospec=True)
def test_fetch_listing_bad_request(mock_get):
    mock_get.side_effect = RequestException

    with pytest.raises(FetchError):
        fetch_listing("wallpaper", "top", "month")


@unittest.mock.patch("redditpaper.reddit_handler.requests.get", autospec=True)
def test_fetch_listing_bad_response(mock_get):
    mock_get.return_value.raise_for_status.side_effect = HTTPError
    mock_get.return_value.status_code = 503

    with pytest.raises(FetchError):
        fetch_listing("wallpaper", "top", "month")


@unittest.mock.patch("redditpaper.reddit_handler.requests.get", autospec=True)
def test_fetch_listing_not_json(mock_get):
    mock_get.return_value.json.side_effect = ValueError("Expecting value")

    with pytest.raises(FetchError):
        fetch_listing("wallpaper", "top", "month")


@unittest.mock.patch("redditpaper.reddit_handler.requests.get", autospec=True)
def test_fetch_listings_keeps_subreddit_order(mock_get, config, make_listing, post):
    config = dataclasses.replace(config, subreddits=("a", "b", "c"))

    def fake_get(url, **kwargs):
        subreddit = url.split("/r/")[1].split("/")[0]
        response = unittest.mock.MagicMock()
        response.json.return_value = make_listing(post(subreddit=subreddit))
        return response

    mock_get.side_effect = fake_get

    listings = fetch_listings(config)

    assert [listing["data"]["children"][0]["data"]["subreddit"] for listing in listings] == [
        "a",
        "b",
        "c",
    ]
    assert mock_get.call_count == 3


@unittest.mock.patch("redditpaper.reddit_handler.requests.get", autospec=True)
def test_fetch_listings_one_failure_fails_all(mock_get, config, make_listing, post):
    config = dataclasses.replace(config, subreddits=("good", "broken"))

    def fake_get(url, **kwargs):
        if "/r/broken/" in url:
            raise RequestException("connection reset")
        response = unittest.mock.MagicMock()
        response.json.return_value = make_listing(post())
        return response

    mock_get.side_effect = fake_get

    with pytest.raises(FetchError):
        fetch_listings(config)


def test_fetch_listings_empty(config):
    assert fetch_listings(dataclasses.replace(config, subreddits=())) == []
