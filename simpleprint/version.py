"""SimplePrint version information."""

__version__ = "0.3.0"


def get_version() -> str:
    """Return the installed SimplePrint version"""
    return __version__
