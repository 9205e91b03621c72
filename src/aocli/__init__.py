"""aocli - Advent of Code workflow automation."""

__version__ = "0.1.0"
