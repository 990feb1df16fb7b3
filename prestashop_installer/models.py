"""
Data models for install requests and the PrestaShop version feed
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from prestashop_installer import constants, utils
from prestashop_installer.exceptions import VersionResolutionError


class Fixture(Enum):
    """Fixture bundles that can be overlaid on a fresh install."""
    NONE = ""
    STARWARS = constants.FIXTURE_STARWARS
    GOT = constants.FIXTURE_GOT
    TECH = constants.FIXTURE_TECH

    @classmethod
    def parse(cls, value: Optional[str]) -> "Fixture":
        """
        Parse a user supplied fixture name.

        Matching is case-insensitive and ignores surrounding whitespace.
        Unknown names are not an error, they simply mean no fixture.

        Args:
            value: Raw option value (may be None)

        Returns:
            Matching Fixture, or Fixture.NONE
        """
        name = (value or "").strip().lower()
        for fixture in cls:
            if fixture.value and fixture.value == name:
                return fixture
        return cls.NONE

    def __bool__(self) -> bool:
        return self is not Fixture.NONE


@dataclass(frozen=True)
class InvocationRequest:
    """
    A parsed `new` command.

    Attributes:
        folder: Target folder as given on the command line
        working_dir: Directory that relative folders and temp files live in
        release: Explicit release version, or None for latest stable
        fixture: Fixture bundle to overlay
    """
    folder: str
    working_dir: Path
    release: Optional[str] = None
    fixture: Fixture = Fixture.NONE

    @property
    def target(self) -> Path:
        """Absolute target directory (absolute folders are kept as-is)."""
        return Path(self.working_dir) / self.folder


@dataclass
class Branch:
    """
    A version line inside a feed channel.

    Attributes:
        name: Branch name (e.g., "1.6")
        num: Full version number (e.g., "1.6.1.3")
        download_link: Archive download URL
    """
    name: str
    num: str
    download_link: str = ""

    @classmethod
    def from_xml(cls, element: ET.Element) -> "Branch":
        """Create a Branch from a <branch> element."""
        return cls(
            name=element.get("name", ""),
            num=(element.findtext("num") or "").strip(),
            download_link=(element.findtext("download/link") or "").strip(),
        )


@dataclass
class Channel:
    """
    A release channel from the version feed.

    Attributes:
        name: Channel name ("stable", "rc", "beta", ...)
        available: Whether the channel is currently downloadable
        branches: Version lines in this channel
    """
    name: str
    available: bool = False
    branches: List[Branch] = field(default_factory=list)

    @property
    def is_stable(self) -> bool:
        return self.name == constants.STABLE_CHANNEL and self.available

    @classmethod
    def from_xml(cls, element: ET.Element) -> "Channel":
        """Create a Channel from a <channel> element."""
        return cls(
            name=element.get("name", ""),
            available=element.get("available", "") == "1",
            branches=[Branch.from_xml(b) for b in element.findall("branch")],
        )

    def latest_branch(self) -> Optional[Branch]:
        """
        Get the branch with the highest version number.

        Later branches win ties, the same as walking the feed with >=.

        Returns:
            Latest Branch, or None if the channel has no branches
        """
        latest = None
        for branch in self.branches:
            if latest is None or utils.compare_versions(branch.num, latest.num) >= 0:
                latest = branch
        return latest


@dataclass
class VersionFeed:
    """
    Parsed channel.xml feed.

    Example feed:
        <channels>
          <channel name="stable" available="1">
            <branch name="1.6">
              <num>1.6.1.3</num>
              <download><link>https://.../prestashop_1.6.1.3.zip</link></download>
            </branch>
          </channel>
        </channels>
    """
    channels: List[Channel] = field(default_factory=list)

    @classmethod
    def from_xml(cls, body: Union[bytes, str]) -> "VersionFeed":
        """
        Parse the version feed.

        Args:
            body: Raw XML response body

        Returns:
            VersionFeed

        Raises:
            VersionResolutionError: If the body is not well-formed XML
        """
        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            raise VersionResolutionError(f"Malformed version feed: {e}") from e

        return cls(channels=[Channel.from_xml(c) for c in root.findall("channel")])

    def stable_channel(self) -> Optional[Channel]:
        """Get the first stable, available channel."""
        for channel in self.channels:
            if channel.is_stable:
                return channel
        return None

    def latest_stable(self) -> Branch:
        """
        Get the latest branch of the stable channel.

        Returns:
            Branch with the highest version number

        Raises:
            VersionResolutionError: If there is no stable channel or it has no branches
        """
        channel = self.stable_channel()
        if channel is None:
            raise VersionResolutionError("Version feed has no available stable channel")

        latest = channel.latest_branch()
        if latest is None:
            raise VersionResolutionError("Stable channel has no branches")
        return latest
