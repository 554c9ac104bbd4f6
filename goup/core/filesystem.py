"""
File system utilities for goup.

This module provides the few file operations goup needs to be careful about:
- Atomic writes for the state file (temp file + rename)
- Safe recursive deletion restricted to the goup root
- Streaming tar extraction with directory traversal checks
"""

import logging
import shutil
import sys
import tarfile
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from goup.core.exceptions import StateIOError

logger = logging.getLogger(__name__)


# ============================================================================
# Error Handling
# ============================================================================


class FilesystemError(StateIOError):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Example:
        >>> is_relative_to(Path("/home/user/go/goup/go1.21.0"), Path("/home/user"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Prevents directory traversal attacks (e.g., paths containing '../').

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_tar_stream(
    fileobj: BinaryIO,
    destination: Union[str, Path],
    compression: str = "gz",
    member_callback: Optional[Callable[[tarfile.TarInfo], None]] = None,
) -> int:
    """
    Extract a tar stream entry by entry as it is read.

    The stream is never seeked, so it can be a network response body. The
    destination is created if missing; existing files are overwritten.

    Args:
        fileobj: Readable binary stream with the (compressed) tar data
        destination: Directory to extract to
        compression: Compression of the stream ('gz', 'bz2', 'xz' or '')
        member_callback: Optional callback invoked after each member

    Returns:
        Number of members extracted

    Raises:
        InsecureArchiveError: If a member would land outside destination
        tarfile.TarError, OSError, EOFError: If the stream is corrupt or
            cannot be written (callers wrap these)
    """
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    count = 0
    with tarfile.open(fileobj=fileobj, mode=f"r|{compression}") as tar:
        for member in tar:
            _validate_archive_path(member.name, destination)

            # Extract with filter for security (Python 3.12+)
            if sys.version_info >= (3, 12):
                tar.extract(member, destination, filter="data")
            else:
                tar.extract(member, destination)

            count += 1
            if member_callback:
                member_callback(member)

    logger.debug(f"Extracted {count} members into {destination}")
    return count


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    This ensures the file is never in a partially-written state.
    If the write fails, the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory (ensures same filesystem)
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        FilesystemError: If path is not under require_prefix, is not a
            directory, or cannot be deleted

    Example:
        >>> safe_rmtree(root / 'go1.20.0', require_prefix=root)
    """
    path = Path(path).absolute()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).absolute()
        if path == require_prefix or not is_relative_to(path, require_prefix):
            raise FilesystemError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return  # Already gone, nothing to do

    if path.is_symlink() or not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e

    logger.debug(f"Removed directory tree: {path}")


__all__ = [
    "FilesystemError",
    "ArchiveExtractionError",
    "InsecureArchiveError",
    "is_relative_to",
    "extract_tar_stream",
    "atomic_write",
    "safe_rmtree",
]
