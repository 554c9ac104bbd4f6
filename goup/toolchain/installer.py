"""
Go archive download and extraction.

The archive is never written to disk as a file: the HTTP response body is
decompressed and unpacked as it streams in, straight into the version's
install directory.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from goup.core.config import DEFAULT_DOWNLOAD_URL
from goup.core.directory import GoupPaths
from goup.core.download import ByteCounter, NullProgressSink, ProgressSink, format_size
from goup.core.exceptions import InstallError
from goup.core.filesystem import extract_tar_stream
from goup.core.version import GoVersion
from goup.toolchain.catalog import FileInfo

logger = logging.getLogger(__name__)


class ArchiveInstaller:
    """
    Downloads Go release archives and unpacks them into the goup root.

    Example:
        >>> installer = ArchiveInstaller(GoupPaths(root))
        >>> installer.install_archive(version, available[version])
        PosixPath('/home/user/go/goup/go1.21.3')
    """

    def __init__(
        self,
        paths: GoupPaths,
        download_url: str = DEFAULT_DOWNLOAD_URL,
        progress_sink: Optional[ProgressSink] = None,
    ):
        """
        Initialize archive installer.

        Args:
            paths: Layout of the goup root
            download_url: Base URL archives are downloaded from
            progress_sink: Receives byte counts while downloading
        """
        self.paths = paths
        self.download_url = download_url
        self.progress_sink = progress_sink or NullProgressSink()

    def archive_url(self, file_info: FileInfo) -> str:
        """URL of the archive described by a catalog entry."""
        return f"{self.download_url.rstrip('/')}/{file_info.filename}"

    def install_archive(self, version: GoVersion, file_info: FileInfo) -> Path:
        """
        Download and unpack one version.

        Existing files in the install directory are overwritten. On failure the
        partially unpacked directory is left in place.

        Args:
            version: Version being installed (names the install directory)
            file_info: Catalog entry for the archive

        Returns:
            The install directory

        Raises:
            InstallError: If the download, decompression or unpacking fails
        """
        url = self.archive_url(file_info)
        install_dir = self.paths.install_dir(version)

        logger.debug(f"Downloading {url} ({format_size(file_info.size)}) into {install_dir}")

        try:
            response = requests.get(url, stream=True, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException as e:
            raise InstallError(f"Failed to get version {version} from {url}: {e}") from e

        counter = ByteCounter(
            response.raw,
            self.progress_sink,
            total_bytes=file_info.size,
            description=str(version),
        )

        try:
            with response:
                response.raw.decode_content = True
                extract_tar_stream(counter, install_dir, compression="gz")
        except Exception as e:
            counter.abandon()
            raise InstallError(f"Failed to unpack downloaded archive for {version}: {e}") from e
        except BaseException:
            counter.abandon()
            raise

        counter.finish()
        logger.debug(f"Installed {version} into {install_dir}")
        return install_dir
