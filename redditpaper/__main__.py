"""
__main__.py

This file adds support for running redditpaper as a python module instead of invoking the
"redditpaper" command line entrypoint, e.g. python -m redditpaper run
"""

from redditpaper.cli import main


if __name__ == "__main__":
    main()
