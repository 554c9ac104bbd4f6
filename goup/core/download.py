"""
Download progress reporting.

Progress is a side channel: a ByteCounter wraps the stream being read and
forwards the size of every chunk to a ProgressSink. The sink only observes the
transfer; it has no say in whether the transfer succeeds.
"""

import logging
from typing import BinaryIO, Optional, Protocol

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """Observer for a byte transfer of known total size."""

    def start(self, total_bytes: int, description: str = "") -> None:
        ...

    def advance(self, num_bytes: int) -> None:
        ...

    def finish(self) -> None:
        """The transfer completed."""
        ...

    def abandon(self) -> None:
        """The transfer stopped before completion."""
        ...


class NullProgressSink:
    """Progress sink that ignores all updates."""

    def start(self, total_bytes: int, description: str = "") -> None:
        pass

    def advance(self, num_bytes: int) -> None:
        pass

    def finish(self) -> None:
        pass

    def abandon(self) -> None:
        pass


class ByteCounter:
    """
    Readable stream wrapper that reports every chunk to a progress sink.

    Example:
        >>> counter = ByteCounter(response.raw, sink, total_bytes=file_info.size)
        >>> extract_tar_stream(counter, destination)
        >>> counter.finish()
    """

    def __init__(
        self,
        inner: BinaryIO,
        sink: Optional[ProgressSink] = None,
        total_bytes: int = 0,
        description: str = "",
    ):
        self.inner = inner
        self.sink = sink or NullProgressSink()
        self.total_bytes = total_bytes
        self.bytes_read = 0
        self._closed = False
        self.sink.start(total_bytes, description)

    def read(self, size: int = -1) -> bytes:
        chunk = self.inner.read(size)
        if chunk:
            self.bytes_read += len(chunk)
            self.sink.advance(len(chunk))
        return chunk

    def finish(self) -> None:
        """Mark the transfer complete (no-op after finish/abandon)."""
        if not self._closed:
            self._closed = True
            self.sink.finish()
            logger.debug(f"Transfer complete: {self.bytes_read} bytes")

    def abandon(self) -> None:
        """Mark the transfer abandoned (no-op after finish/abandon)."""
        if not self._closed:
            self._closed = True
            self.sink.abandon()
            logger.debug(
                f"Transfer abandoned after {self.bytes_read} of {self.total_bytes} bytes"
            )


def format_size(num_bytes: int) -> str:
    """
    Format a byte count for display.

    Example:
        >>> format_size(68_000_000)
        '64.8 MB'
    """
    return f"{num_bytes / 1024 / 1024:.1f} MB"
