"""
File loading for images and requirement files.

Loads happen eagerly while the command line is scanned, so a missing file
fails the run before any device is touched.
"""

import logging
from pathlib import Path
from typing import Protocol

from .errors import FileLoadError

logger = logging.getLogger(__name__)


class FileLoader(Protocol):
    """Anything that can turn a path into its raw bytes."""

    def load(self, path: str) -> bytes:
        """Return file contents, raising FileLoadError on failure."""
        ...


class PathFileLoader:
    """Read files from the local filesystem."""

    def load(self, path: str) -> bytes:
        try:
            data = Path(path).read_bytes()
        except FileNotFoundError:
            raise FileLoadError(path, "no such file")
        except OSError as e:
            raise FileLoadError(path, e.strerror or str(e))
        logger.debug(f"Loaded {len(data):,} bytes from {path}")
        return data
