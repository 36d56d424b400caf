"""Access to mail corpora on disk.

A ``DocumentSource`` supplies raw bytes for a path and enumerates the
files beneath a directory. ``FileSystemSource`` is the standard
implementation; other sources can be plugged into the builder and the
classifier for testing or alternative storage.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path


class DocumentSource(ABC):
    """Abstract provider of mail documents.

    Implementations must raise ``OSError`` (or a subclass) when a path is
    unreadable or a directory cannot be traversed.
    """

    @abstractmethod
    def read(self, path: Path) -> bytes:
        """Return the raw contents of the document at ``path``.

        Raises:
            OSError: If the document cannot be read.
        """
        ...

    @abstractmethod
    def list_files(self, root: Path) -> Iterator[Path]:
        """Lazily yield every document below ``root``, recursively.

        Directories themselves are never yielded. No ordering is promised.

        Raises:
            OSError: If ``root`` or any subdirectory cannot be traversed.
        """
        ...

    def has_files(self, root: Path) -> bool:
        """True if at least one document exists below ``root``."""
        return next(iter(self.list_files(root)), None) is not None


def _raise_walk_error(error: OSError) -> None:
    raise error


class FileSystemSource(DocumentSource):
    """Reads documents from the local file system."""

    def read(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def list_files(self, root: Path) -> Iterator[Path]:
        # os.walk reports a missing root or unreadable subdirectory through
        # onerror; re-raise so traversal failures abort the caller. Symlinked
        # subdirectories are followed like regular ones.
        walker = os.walk(root, onerror=_raise_walk_error, followlinks=True)
        for dirpath, _dirnames, filenames in walker:
            for name in filenames:
                yield Path(dirpath) / name
