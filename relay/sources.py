"""
Line Source

Reads newline-delimited text input as a lazy sequence of TextRecords.
Every line is yielded, blank ones included; callers decide what to skip.
"""

import logging
from typing import Iterator

from relay.errors import LocalFileError
from relay.models import TextRecord

logger = logging.getLogger(__name__)


def read_lines(path: str, encoding: str = "utf-8") -> Iterator[TextRecord]:
    """Yield one TextRecord per line of the file at ``path``.

    Args:
        path: Input text file
        encoding: Text encoding of the file

    Yields:
        TextRecord with 1-based line index and the line stripped of its
        trailing newline

    Raises:
        LocalFileError: If the file cannot be opened or a read fails mid-stream
    """
    logger.debug(f"Opening input file {path}")
    try:
        with open(path, "r", encoding=encoding) as handle:
            for index, line in enumerate(handle, start=1):
                yield TextRecord(index=index, text=line.rstrip("\r\n"))
    except (OSError, UnicodeDecodeError) as e:
        raise LocalFileError(f"Cannot read input file {path}", cause=e) from e
