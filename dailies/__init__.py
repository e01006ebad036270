"""Daily journaling in plain markdown: templates, habit counters and carried-over TODOs."""

__version__ = "0.1.0"
__all__ = ["__version__"]