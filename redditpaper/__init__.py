"""Set your desktop wallpaper from the best images on reddit."""

__version__ = "0.1.0"
