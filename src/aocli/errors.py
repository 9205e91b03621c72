"""Base exception for aocli."""


class AocError(Exception):
    """Base class for every failure the CLI reports to the user.

    Each subclass is one failure kind; its message names the offending
    value (placeholder, path, command) so the tool stays debuggable
    without turning on logging.
    """
