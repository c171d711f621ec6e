"""CDragon Assets - versioned, locale-partitioned League of Legends asset crawler."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cdragon-assets")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"  # Fallback for development without install
