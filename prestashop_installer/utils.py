"""
Utility functions for the PrestaShop installer
Version comparison, temporary naming, filesystem helpers and console symbols
"""

import hashlib
import os
import re
import shutil
import sys
import time
import uuid
from pathlib import Path
from typing import Callable, List, Optional, Union

from prestashop_installer import constants


# Global symbol variables (set by setup_symbols)
SYMBOL_CHECK = '[OK]'
SYMBOL_ERROR = '[ERROR]'
SYMBOL_WARNING = '[WARNING]'

PathLike = Union[str, Path]

# Keeps empty fixture folders in version control, never copied into a shop
PLACEHOLDER_FILES = (".gitkeep",)


def detect_unicode_support(force_ascii=False):
    """
    Detect if the terminal supports Unicode output.

    Args:
        force_ascii: If True, force ASCII mode regardless of terminal support

    Returns:
        True if Unicode is supported, False otherwise
    """
    if force_ascii:
        return False

    # Check for environment variable to force ASCII mode
    if os.environ.get('FORCE_ASCII', '').lower() in ('1', 'true', 'yes'):
        return False

    try:
        encoding = sys.stdout.encoding or ''
        if encoding.lower() in ('utf-8', 'utf8'):
            return True

        '✓'.encode(encoding)
        return True
    except (UnicodeEncodeError, AttributeError, LookupError):
        return False


def setup_symbols(force_ascii=False):
    """
    Set up symbol variables based on Unicode support.

    Args:
        force_ascii: If True, force ASCII mode
    """
    global SYMBOL_CHECK, SYMBOL_ERROR, SYMBOL_WARNING

    if detect_unicode_support(force_ascii):
        SYMBOL_CHECK = '✓'
        SYMBOL_ERROR = '✗'
        SYMBOL_WARNING = '⚠'
    else:
        SYMBOL_CHECK = '[OK]'
        SYMBOL_ERROR = '[ERROR]'
        SYMBOL_WARNING = '[WARNING]'


def _version_segment(segment: str) -> int:
    """Integer value of one dotted segment ("10" -> 10, "3beta" -> 3, "rc" -> 0)."""
    match = re.match(r"\d+", segment.strip())
    return int(match.group(0)) if match else 0


def parse_version(version: str) -> List[int]:
    """
    Split a dotted version string into integer segments.

    Args:
        version: Version string such as "1.6.1.10"

    Returns:
        List of integer segments (e.g., [1, 6, 1, 10])
    """
    if not version:
        return []
    return [_version_segment(part) for part in version.strip().split(".")]


def compare_versions(left: str, right: str) -> int:
    """
    Compare two dotted version strings numerically.

    Segments are compared left to right as integers and the shorter
    version is padded with zeros, so "1.6.1.10" > "1.6.1.9" and
    "1.6" == "1.6.0".

    Args:
        left: First version
        right: Second version

    Returns:
        -1 if left < right, 0 if equal, 1 if left > right
    """
    a = parse_version(left)
    b = parse_version(right)
    length = max(len(a), len(b))
    a += [0] * (length - len(a))
    b += [0] * (length - len(b))

    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def make_temp_name(working_dir: PathLike, suffix: str = "",
                   clock: Callable[[], float] = time.time,
                   token_factory: Callable[[], str] = lambda: uuid.uuid4().hex) -> Path:
    """
    Build a collision resistant temporary path inside the working directory.

    The name is the md5 of the current time plus a unique token, e.g.
    "<working_dir>/prestashop_3f2a...c1.zip".

    Args:
        working_dir: Directory the temporary path lives in
        suffix: Optional suffix such as ".zip"
        clock: Time source
        token_factory: Unique token source

    Returns:
        Temporary path (not created)
    """
    seed = f"{clock()}{token_factory()}"
    digest = hashlib.md5(seed.encode("utf-8")).hexdigest()
    return Path(working_dir) / f"{constants.TEMP_PREFIX}{digest}{suffix}"


def ensure_directory(path: PathLike) -> None:
    """
    Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path to create
    """
    Path(path).mkdir(parents=True, exist_ok=True)


def path_exists(path: PathLike) -> bool:
    """Return True for existing files, directories and dangling symlinks."""
    path = Path(path)
    return path.exists() or path.is_symlink()


def mirror_directory(source: PathLike, destination: PathLike) -> List[Path]:
    """
    Recursively copy a directory tree into destination, overwriting files
    that already exist at the same relative path.
    Placeholder files (.gitkeep) are not copied.

    Args:
        source: Directory to copy from
        destination: Directory to copy into (created if missing)

    Returns:
        Relative paths of the files that were copied
    """
    source = Path(source)
    copied = [p.relative_to(source) for p in sorted(source.rglob("*"))
              if p.is_file() and p.name not in PLACEHOLDER_FILES]
    shutil.copytree(source, destination, dirs_exist_ok=True,
                    ignore=shutil.ignore_patterns(*PLACEHOLDER_FILES))
    return copied


def remove_path(path: PathLike) -> bool:
    """
    Remove a file or directory tree.

    Args:
        path: File or directory to remove

    Returns:
        True if something was removed, False if the path did not exist

    Raises:
        OSError: If removal fails
    """
    path = Path(path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
        return True
    if path_exists(path):
        path.unlink()
        return True
    return False


def display_path(path: PathLike, working_dir: Optional[PathLike] = None) -> str:
    """
    Format a path for console output, relative to working_dir when possible.

    Args:
        path: Path to format
        working_dir: Base directory (defaults to current working directory)

    Returns:
        "./shop" style path for children of working_dir, otherwise the path as given
    """
    path = Path(path)
    base = Path(working_dir) if working_dir is not None else Path.cwd()
    try:
        relative = path.relative_to(base)
    except ValueError:
        return str(path)
    return f"./{relative.as_posix()}"
