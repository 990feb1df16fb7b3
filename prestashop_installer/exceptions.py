"""
Exceptions raised while creating a PrestaShop application.

Every step of the install flow raises a subclass of InstallerError so the
CLI can report any failure with a single message.
"""


class InstallerError(Exception):
    """Base exception for all installer errors."""


class AlreadyExistsError(InstallerError):
    """Raised when the target folder is already occupied by a file or directory."""


class VersionResolutionError(InstallerError):
    """Raised when no download URL can be resolved from the version feed."""


class DownloadError(InstallerError):
    """Raised when the release archive cannot be fetched or written to disk."""


class ExtractionError(InstallerError):
    """Raised when the release archive cannot be opened or is corrupt."""


class LayoutError(InstallerError):
    """
    Raised when the extracted archive does not contain the expected
    top-level folder. Signals a change in the upstream archive format.
    """
