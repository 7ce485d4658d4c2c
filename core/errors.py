"""
Exceptions raised by FileHelper operations.

Expected absence (nothing matched, nothing to delete, destination taken)
is never reported through these; they are for operations that could not
be completed.
"""

from typing import List, Optional, Tuple


class FileHelperError(Exception):
    """Base class for all FileHelper failures."""


class NotFoundError(FileHelperError, FileNotFoundError):
    """A source file or directory does not exist."""


class InvalidArgumentError(FileHelperError, ValueError):
    """An argument was missing or unusable (e.g. an empty extension set)."""


class FileOperationError(FileHelperError, OSError):
    """
    An underlying file-system call failed.

    Batch operations that keep going after individual failures attach
    the collected ``(path, message)`` pairs as ``failures``.
    """

    def __init__(self, message: str, failures: Optional[List[Tuple[str, str]]] = None):
        super().__init__(message)
        self.failures = failures or []
