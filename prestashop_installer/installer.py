"""
PrestaShop application scaffolder

Runs the create-new-application flow:
    verify target -> resolve URL -> download -> extract -> move -> fixture -> clean up

Each step raises an InstallerError subclass on failure, which aborts the
remaining steps. Temporary files are cleaned up whether or not the flow
succeeds.
"""

import logging
import shutil
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from prestashop_installer import constants, utils
from prestashop_installer.api import ReleaseAPI
from prestashop_installer.downloader import ArchiveDownloader
from prestashop_installer.exceptions import AlreadyExistsError, LayoutError
from prestashop_installer.models import Fixture, InvocationRequest

# Fixture bundles shipped with the package
FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

Step = Tuple[str, Callable[[], object]]


def run_steps(steps: List[Step], logger: Optional[logging.Logger] = None) -> None:
    """
    Run steps in order, stopping at the first one that raises.

    Args:
        steps: (name, callable) pairs
        logger: Logger for step tracing
    """
    for name, step in steps:
        if logger:
            logger.debug(f"Running step: {name}")
        step()


@dataclass
class InstallResult:
    """
    Outcome of a successful install.

    Attributes:
        target: Directory the application was created in
        download_url: URL the archive was fetched from
        fixture: Fixture that was applied (Fixture.NONE if none)
        fixture_files: Files overwritten or added by the fixture
    """
    target: Path
    download_url: str
    fixture: Fixture = Fixture.NONE
    fixture_files: Optional[List[Path]] = None


class Scaffolder:
    """
    Creates a new PrestaShop application from a release archive.

    Temporary files are named from an md5 of the current time plus a unique
    token. Both sources can be replaced to get predictable names in tests.
    """

    def __init__(self, api: Optional[ReleaseAPI] = None,
                 downloader: Optional[ArchiveDownloader] = None,
                 fixtures_dir: Path = FIXTURES_DIR,
                 clock: Callable[[], float] = time.time,
                 token_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
                 progress_callback: Optional[Callable[[str], None]] = None):
        """
        Initialize the scaffolder.

        Args:
            api: Release API used to resolve download URLs
            downloader: Downloader used to fetch and extract archives
            fixtures_dir: Directory containing fixture bundles
            clock: Time source for temporary names
            token_factory: Unique token source for temporary names
            progress_callback: Optional callback(message) for progress lines
        """
        self.api = api or ReleaseAPI()
        self.downloader = downloader or ArchiveDownloader()
        self.fixtures_dir = Path(fixtures_dir)
        self.clock = clock
        self.token_factory = token_factory
        self.progress_callback = progress_callback
        self.logger = logging.getLogger("prestashop_installer.installer")

    def _progress(self, message: str) -> None:
        self.logger.info(message)
        if self.progress_callback:
            self.progress_callback(message)

    def verify_application_does_not_exist(self, directory: Path) -> None:
        """
        Verify that the target is free.

        Raises:
            AlreadyExistsError: If a file or directory occupies the target path
        """
        if utils.path_exists(directory):
            raise AlreadyExistsError(f"Application already exists: {directory}")

    def make_filename(self, working_dir: Path) -> Path:
        """Generate a random temporary archive filename."""
        return utils.make_temp_name(working_dir, ".zip", self.clock, self.token_factory)

    def make_folder_name(self, working_dir: Path) -> Path:
        """Generate a random temporary extraction folder."""
        return utils.make_temp_name(working_dir, "", self.clock, self.token_factory)

    def move_files(self, tmp_directory: Path, directory: Path) -> None:
        """
        Move the extracted release folder to the target directory.

        Raises:
            LayoutError: If the archive did not contain the expected top-level folder
        """
        source = Path(tmp_directory) / constants.ARCHIVE_ROOT_DIR
        if not source.is_dir():
            raise LayoutError(
                f"Archive has no '{constants.ARCHIVE_ROOT_DIR}/' folder, "
                f"the release layout may have changed"
            )

        utils.ensure_directory(Path(directory).parent)
        shutil.move(str(source), str(directory))
        self.logger.debug(f"Moved {source} to {directory}")

    def apply_fixture(self, fixture: Fixture, directory: Path) -> List[Path]:
        """
        Copy fixture pictures over the installation.

        A missing fixture bundle is skipped without error.

        Args:
            fixture: Fixture to apply
            directory: Installation directory

        Returns:
            Relative paths of the files copied from the fixture
        """
        if not fixture:
            return []

        fixture_dir = self.fixtures_dir / fixture.value
        if not fixture_dir.is_dir():
            self.logger.debug(f"Fixture bundle not found, skipping: {fixture_dir}")
            return []

        copied = utils.mirror_directory(fixture_dir, directory)
        self.logger.debug(f"Applied fixture '{fixture.value}' ({len(copied)} files)")
        return copied

    def clean_up(self, *paths: Path) -> None:
        """Remove temporary files and folders, logging failures instead of raising."""
        for path in paths:
            try:
                if utils.remove_path(path):
                    self.logger.debug(f"Removed {path}")
            except OSError as e:
                self.logger.warning(f"Could not remove temporary path {path}: {e}")

    def create(self, request: InvocationRequest) -> InstallResult:
        """
        Create a new PrestaShop application.

        Args:
            request: Parsed invocation

        Returns:
            InstallResult describing the new application

        Raises:
            InstallerError: If any step fails
        """
        directory = request.target
        self.verify_application_does_not_exist(directory)

        self._progress("Creating PrestaShop application...")

        download_url = self.api.get_download_url(request.release)
        self._progress(f"Downloading from URL: {download_url}")

        zip_file = self.make_filename(request.working_dir)
        tmp_folder = self.make_folder_name(request.working_dir)
        result = InstallResult(target=directory, download_url=download_url,
                               fixture=request.fixture)

        def extract():
            self._progress(f"Extracting files to {utils.display_path(directory, request.working_dir)}/...")
            self.downloader.extract(zip_file, tmp_folder)

        def fixture():
            result.fixture_files = self.apply_fixture(request.fixture, directory)

        steps = [
            ("download", lambda: self.downloader.download(download_url, zip_file)),
            ("extract", extract),
            ("move", lambda: self.move_files(tmp_folder, directory)),
            ("fixture", fixture),
        ]

        try:
            run_steps(steps, self.logger)
        finally:
            self.clean_up(zip_file, tmp_folder)

        self._progress("PrestaShop is ready to be installed!")
        return result
