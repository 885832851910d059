"""gh-notifications - a local cache for your GitHub notification inbox."""

__version__ = "0.1.0"
