"""
PrestaShop Installer - Create new PrestaShop applications from the command line

Downloads an official PrestaShop release archive (an explicit version or the
latest stable one from the channel feed), extracts it into a new folder and
optionally overlays a fixture bundle of demo pictures.
"""

__version__ = "0.1.0"
__author__ = "prestashop-installer Contributors"
__license__ = "MIT"

from prestashop_installer.api import ReleaseAPI
from prestashop_installer.downloader import ArchiveDownloader
from prestashop_installer.installer import Scaffolder
from prestashop_installer.models import Fixture, InvocationRequest, VersionFeed

__all__ = [
    "ReleaseAPI",
    "ArchiveDownloader",
    "Scaffolder",
    "Fixture",
    "InvocationRequest",
    "VersionFeed",
]
