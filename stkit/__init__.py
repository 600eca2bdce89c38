"""Building blocks of a simple X terminal: sixel decoding, box drawing, arguments, URLs, resources, keys and actions."""

__version__ = "0.8.4"

__all__ = ["actions", "args", "boxdraw", "config", "hls", "keys", "sixel", "urls"]