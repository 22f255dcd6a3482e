"""
Audio Staging

Synthesized speech arrives as a forward-only stream, while an upload needs
a seekable source it can size and re-read. StagingFile materializes the
stream to a local file and hands a rewound handle to the upload step.

The file is scoped: it is deleted when the ``with`` block exits, whether the
upload succeeded or failed. A deletion failure is logged and never raised.
"""

import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Optional

from botocore.exceptions import BotoCoreError, ClientError

from relay.errors import LocalFileError, SynthesisError

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


class StagingFile:
    """Scoped local copy of a synthesized audio stream.

    Example:
        >>> with StagingFile("/tmp/audioFile-20240102030405-output.mp3") as staging:
        ...     staging.materialize(polly_stream)
        ...     store.put(bucket, key, staging.handle)
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self.size = 0
        self._handle: Optional[BinaryIO] = None

    def __enter__(self) -> "StagingFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    @property
    def handle(self) -> BinaryIO:
        if self._handle is None:
            raise LocalFileError(f"Staging file {self.path} has not been materialized")
        return self._handle

    def materialize(self, stream: BinaryIO) -> int:
        """Drain ``stream`` into the staging file and rewind it.

        The source stream is closed afterwards.

        Returns:
            Number of bytes written

        Raises:
            LocalFileError: If the file cannot be created or written
            SynthesisError: If the audio stream breaks while being read
        """
        try:
            self._handle = open(self.path, "w+b")
            shutil.copyfileobj(stream, self._handle, COPY_CHUNK_SIZE)
            self._handle.flush()
            self.size = self._handle.tell()
            self._handle.seek(0)
        except (BotoCoreError, ClientError) as e:
            raise SynthesisError(f"Audio stream for {self.path.name} failed: {e}", cause=e) from e
        except OSError as e:
            raise LocalFileError(f"Cannot write staging file {self.path}", cause=e) from e
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()
        logger.debug(f"Staged {self.size} bytes to {self.path}")
        return self.size

    def release(self) -> bool:
        """Close and delete the staging file.

        Returns:
            True if the file no longer exists
        """
        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as e:
                logger.error(f"Error closing local audio file {self.path}: {e}")
            self._handle = None

        if not self.path.exists():
            return True
        try:
            self.path.unlink()
        except OSError as e:
            logger.error(f"Error deleting local audio file {self.path}: {e}")
            return False
        logger.info(f"Deleted local audio file: {self.path.name}")
        return True
