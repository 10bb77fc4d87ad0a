"""Version information for :mod:`sparqlrepo`."""

__all__ = [
    "VERSION",
    "get_version",
]

VERSION = "0.3.0"


def get_version() -> str:
    """Get the :mod:`sparqlrepo` version string."""
    return VERSION
