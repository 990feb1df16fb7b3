"""
PrestaShop Release API Client
Resolves release download URLs from an explicit version or the channel feed
"""

import logging
from typing import Optional

import requests

from prestashop_installer import __version__, constants
from prestashop_installer.exceptions import VersionResolutionError
from prestashop_installer.models import Branch, VersionFeed


class ReleaseAPI:
    """
    Client for the PrestaShop release endpoints.

    Provides methods to:
    - Build the download URL of an explicit release
    - Fetch and parse the channel.xml version feed
    - Resolve the download URL of the latest stable release
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: float = constants.DEFAULT_TIMEOUT):
        """
        Initialize the release API client.

        Args:
            session: Requests session to use (a new one is created if omitted)
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self.logger = logging.getLogger("prestashop_installer.api")

        if session is None:
            session = requests.Session()
            session.headers.update({
                "User-Agent": constants.USER_AGENT.format(version=__version__)
            })
        self.session = session

    def get_release_url(self, version: str) -> str:
        """Get the download URL of an explicit release (no network call)."""
        return constants.RELEASE_URL_TEMPLATE.format(version=version.strip())

    def get_version_feed(self) -> VersionFeed:
        """
        Fetch and parse the channel feed.

        Returns:
            Parsed VersionFeed

        Raises:
            VersionResolutionError: If the feed cannot be fetched or parsed
        """
        self.logger.debug(f"Fetching version feed from {constants.CHANNEL_FEED_URL}")

        try:
            response = self.session.get(constants.CHANNEL_FEED_URL, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise VersionResolutionError(f"Could not fetch version feed: {e}") from e

        feed = VersionFeed.from_xml(response.content)
        self.logger.debug(f"Version feed lists {len(feed.channels)} channels")
        return feed

    def get_latest_stable(self) -> Branch:
        """
        Get the latest stable branch from the channel feed.

        Raises:
            VersionResolutionError: If no stable branch with a download link exists
        """
        branch = self.get_version_feed().latest_stable()
        if not branch.download_link:
            raise VersionResolutionError("Could not find latest PrestaShop version download URL!")

        self.logger.info(f"Latest stable release is {branch.num}")
        return branch

    def get_download_url(self, version: Optional[str] = None) -> str:
        """
        Get the archive download URL.

        An explicit version is substituted into the release URL template
        without checking that it exists; a bad version surfaces later as a
        download error. Without a version the latest stable release is
        looked up in the channel feed.

        Args:
            version: Release version (e.g., "1.6.1.3") or None for latest stable

        Returns:
            Archive download URL

        Raises:
            VersionResolutionError: If the latest stable release cannot be resolved
        """
        if version and version.strip():
            return self.get_release_url(version)

        return self.get_latest_stable().download_link
