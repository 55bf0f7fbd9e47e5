"""Version string resolution from installed distribution metadata."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "openskills"
FALLBACK_VERSION = "1.x.x"


def resolve_version() -> str:
    """Distribution version without any `+local` build suffix, else the package version, else 1.x.x."""
    try:
        raw = version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        raw = ""
    if raw:
        return raw.split("+", 1)[0]

    from openskills import __version__

    return __version__ or FALLBACK_VERSION
