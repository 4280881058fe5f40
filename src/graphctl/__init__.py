"""graphctl — in-memory graph algorithms with a command-line harness."""

__version__ = "0.1.0"
