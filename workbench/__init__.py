"""DER encoding helpers, a sample Teacher record format, and a behaviour-tree toolkit."""

__version__ = "0.1.0"