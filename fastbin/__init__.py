"""Download executables from URLs or compressed tar archives and install them."""

__version__ = "0.0.1"