"""
Result Sink

Append-only local file holding one translated line per processed record,
in input order. The file is ephemeral: it is flushed at the end of a
successful run, handed to whatever persists it, and then deleted.
"""

import logging
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from relay.errors import LocalFileError
from relay.models import TranslatedRecord

logger = logging.getLogger(__name__)


class ResultSink:
    """Accumulates translated lines into a single output file.

    Usage:
        with ResultSink("translated_text.txt") as sink:
            sink.append(record)
            sink.flush()
        # file is deleted here
    """

    def __init__(self, path: str, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self._handle: Optional[TextIO] = None
        self._entries: List[str] = []

    def open(self) -> "ResultSink":
        """Create (or truncate) the output file.

        Raises:
            LocalFileError: If the file cannot be created
        """
        try:
            self._handle = open(self.path, "w", encoding=self.encoding)
        except OSError as e:
            raise LocalFileError(f"Cannot create output file {self.path}", cause=e) from e
        logger.debug(f"Opened result sink {self.path}")
        return self

    def __enter__(self) -> "ResultSink":
        if self._handle is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.discard()
        return False

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def append(self, record: TranslatedRecord) -> None:
        """Append one translated line.

        Raises:
            LocalFileError: If the sink is not open or the write fails
        """
        if self._handle is None:
            raise LocalFileError(f"Result sink {self.path} is not open")
        try:
            self._handle.write(record.translated_text + "\n")
        except OSError as e:
            raise LocalFileError(f"Cannot write to output file {self.path}", cause=e) from e
        self._entries.append(record.translated_text)

    def flush(self) -> None:
        """Flush buffered lines to disk."""
        if self._handle is None:
            raise LocalFileError(f"Result sink {self.path} is not open")
        try:
            self._handle.flush()
        except OSError as e:
            raise LocalFileError(f"Cannot flush output file {self.path}", cause=e) from e

    def read_bytes(self) -> bytes:
        """Return the flushed file content."""
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise LocalFileError(f"Cannot read output file {self.path}", cause=e) from e

    def discard(self) -> bool:
        """Close and delete the local file.

        Failures are logged, not raised.

        Returns:
            True if the file no longer exists
        """
        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as e:
                logger.error(f"Error closing local text file {self.path}: {e}")
            self._handle = None

        if not self.path.exists():
            return True
        try:
            self.path.unlink()
        except OSError as e:
            logger.error(f"Error deleting local text file {self.path}: {e}")
            return False
        logger.info(f"Deleted local text file: {self.path}")
        return True
