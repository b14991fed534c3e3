# src/task_tracker/errors.py

"""
Error kinds raised by the store and the service.

The CLI maps these to exit codes; nothing below the dispatcher terminates the process.
"""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for all user-facing failures."""


class ValidationError(TaskTrackerError):
    """Bad user input (empty title, malformed id). Raised before any storage access."""


class StorageError(TaskTrackerError):
    pass


class StorageUnavailable(StorageError):
    """The SQLite file cannot be opened, created or read."""


class StorageWriteError(StorageError):
    """An insert or update failed; the transaction was rolled back."""


class ArtifactError(TaskTrackerError):
    """A chart file could not be written."""
