"""
Release archive downloader
Fetches a release archive over HTTP and extracts it to a directory
"""

import logging
import os
import zipfile
import zlib
from pathlib import Path
from typing import List, Optional, Union

import requests

from prestashop_installer import __version__, constants, utils
from prestashop_installer.exceptions import DownloadError, ExtractionError


class ArchiveDownloader:
    """
    Downloads and extracts PrestaShop release archives.

    Downloads are a single synchronous GET written to disk in one go;
    there is no resume or retry.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: float = constants.DEFAULT_TIMEOUT):
        """
        Initialize the downloader.

        Args:
            session: Requests session to use (a new one is created if omitted)
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self.logger = logging.getLogger("prestashop_installer.downloader")

        if session is None:
            session = requests.Session()
            session.headers.update({
                "User-Agent": constants.USER_AGENT.format(version=__version__)
            })
        self.session = session

    def download(self, url: str, output_path: Union[str, Path]) -> Path:
        """
        Download an archive to a file, overwriting it if present.

        Args:
            url: Archive URL
            output_path: Path to save the archive

        Returns:
            Path to the downloaded file

        Raises:
            DownloadError: On network failure, non-success status or write failure
        """
        output_path = Path(output_path)

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(f"Failed to download {url}: {e}") from e

        try:
            utils.ensure_directory(output_path.parent)
            with open(output_path, 'wb') as f:
                f.write(response.content)
        except OSError as e:
            raise DownloadError(f"Failed to write {output_path}: {e}") from e

        self.logger.debug(f"Downloaded {url} to {output_path} ({len(response.content):,} bytes)")
        return output_path

    def extract(self, archive_path: Union[str, Path], output_dir: Union[str, Path]) -> List[str]:
        """
        Extract every entry of a zip archive, keeping relative paths.

        Args:
            archive_path: Zip archive to open
            output_dir: Destination directory (created if missing)

        Returns:
            Names of the extracted entries

        Raises:
            ExtractionError: If the archive is missing, unreadable or corrupt
        """
        try:
            utils.ensure_directory(output_dir)
            with zipfile.ZipFile(archive_path) as archive:
                names = archive.namelist()
                archive.extractall(output_dir)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ExtractionError(f"Corrupt archive {archive_path}: {e}") from e
        except (NotImplementedError, RuntimeError) as e:
            # Unsupported compression method or encrypted entries
            raise ExtractionError(f"Unsupported archive {archive_path}: {e}") from e
        except OSError as e:
            raise ExtractionError(f"Could not extract {archive_path}: {e}") from e

        self.logger.debug(f"Extracted {len(names)} entries to {os.fspath(output_dir)}")
        return names
