"""Single-user command-line task tracker backed by SQLite."""

__version__ = "0.1.0"
