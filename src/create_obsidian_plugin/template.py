"""
Template download and extraction.

This module fetches the template zip archive into memory and unpacks it into
the destination directory. GitHub branch archives wrap the whole project in a
single "<repo>-<branch>/" folder whose name is not known up front; it is
discovered from the common root of all entries and flattened away.
"""

import io
import logging
import shutil
import tempfile
import zipfile
import zlib
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional, Union

import requests

from create_obsidian_plugin.core.config.models import ScaffoldConfig
from create_obsidian_plugin.core.exceptions import (
    ErrorCode,
    ExistsError,
    FetchError,
    FilesystemError,
)


logger = logging.getLogger(__name__)


class TemplateFetcher:
    """
    Downloads template archives over HTTP.

    A single requests session is kept so that repeated downloads (tests,
    programmatic callers) share connection pooling and headers.
    """

    def __init__(self, config: Optional[ScaffoldConfig] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            config: Scaffold configuration (timeout, user agent)
            session: Optional pre-built session, mainly for tests
        """
        self.config = config or ScaffoldConfig()
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', self.config.user_agent)

    def fetch(self, url: str) -> bytes:
        """
        Download the archive at ``url`` fully into memory.

        Raises:
            FetchError: On network failure or a non-2xx response
        """
        logger.info("Downloading template from %s", url)
        try:
            response = self.session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise FetchError(
                f"Failed to download template ({e}).",
                url=url,
                cause=e
            ) from e

        if not response.ok:
            raise FetchError(
                f"Failed to download template (status={response.status_code}).",
                error_code=ErrorCode.NETWORK_INVALID_RESPONSE,
                url=url,
                status_code=response.status_code
            )

        logger.debug("Downloaded %d bytes", len(response.content))
        return response.content


def find_archive_root(names: Iterable[str]) -> Optional[str]:
    """
    Return the top-level folder shared by every archive entry.

    Returns None when the entries do not all live under one folder, including
    the case of a single top-level file.

    Examples:
        >>> find_archive_root(["pkg-master/", "pkg-master/main.ts"])
        'pkg-master'
        >>> find_archive_root(["main.ts", "README.md"]) is None
        True
    """
    root = None
    for name in names:
        parts = PurePosixPath(name).parts
        if not parts:
            continue
        # A bare file at the top level can never be a wrapper folder
        if len(parts) == 1 and not name.endswith("/"):
            return None
        if root is None:
            root = parts[0]
        elif parts[0] != root:
            return None
    return root


def _check_entry_safe(name: str) -> None:
    path = PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute() or ".." in path.parts or (path.parts and ":" in path.parts[0]):
        raise FilesystemError(
            f"Refusing to extract unsafe archive entry: {name}",
            error_code=ErrorCode.FS_UNSAFE_ARCHIVE_ENTRY,
            path=name
        )


def _move_entry(source: Path, target: Path) -> None:
    try:
        if target.is_dir() and source.is_dir():
            # Only reachable with overwrite: merge into the existing folder
            shutil.copytree(source, target, dirs_exist_ok=True)
        else:
            shutil.move(str(source), str(target))
    except OSError as e:
        raise FilesystemError(
            f"Failed to move {source} to {target}: {e}",
            error_code=ErrorCode.FS_MOVE_FAILED,
            path=target,
            cause=e
        ) from e


def extract_archive(
    data: bytes,
    destination: Union[str, Path],
    overwrite: bool = False,
    max_workers: int = 4,
) -> Path:
    """
    Unpack a template archive into ``destination``.

    The archive is first extracted into a temporary sibling of the
    destination. The children of the wrapper folder are then moved into the
    destination itself and the temporary directory is removed.

    Args:
        data: Raw zip archive bytes
        destination: Directory that will hold the project
        overwrite: Allow extracting into an existing directory
        max_workers: Threads used to move the flattened entries

    Returns:
        The destination path

    Raises:
        ExistsError: If the destination exists and overwrite is False
        FetchError: If the data is not a zip archive or a member is corrupt
        FilesystemError: On unsafe entries or any filesystem failure
    """
    destination = Path(destination)
    if not overwrite and destination.exists():
        raise ExistsError(
            f"Destination path already exists ({destination}).",
            path=destination
        )

    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise FetchError(
            f"Downloaded template is not a valid zip archive: {e}",
            error_code=ErrorCode.NETWORK_INVALID_ARCHIVE,
            cause=e
        ) from e

    with archive:
        names = archive.namelist()
        for name in names:
            _check_entry_safe(name)
        wrapper = find_archive_root(names)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            staging = Path(tempfile.mkdtemp(
                prefix=f".{destination.name}-", dir=destination.parent
            ))
        except OSError as e:
            raise FilesystemError(
                f"Failed to create staging directory next to {destination}: {e}",
                path=destination.parent,
                cause=e
            ) from e

        try:
            archive.extractall(staging)
        except (zipfile.BadZipFile, NotImplementedError, zlib.error) as e:
            # Member data is corrupt or uses an unsupported compression method
            shutil.rmtree(staging, ignore_errors=True)
            raise FetchError(
                f"Downloaded template is not a valid zip archive: {e}",
                error_code=ErrorCode.NETWORK_INVALID_ARCHIVE,
                cause=e
            ) from e
        except OSError as e:
            raise FilesystemError(
                f"Failed to extract template into {staging}: {e}",
                path=staging,
                cause=e
            ) from e

    extracted_root = staging / wrapper if wrapper else staging
    logger.debug("Extracted %d entries, wrapper folder: %s", len(names), wrapper)

    try:
        destination.mkdir(parents=True, exist_ok=overwrite)
        children = sorted(extracted_root.iterdir())
    except OSError as e:
        raise FilesystemError(
            f"Failed to prepare destination {destination}: {e}",
            path=destination,
            cause=e
        ) from e

    # Each move targets a distinct path, so ordering is irrelevant
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="extract-") as pool:
        futures = [
            pool.submit(_move_entry, child, destination / child.name)
            for child in children
        ]
        for future in futures:
            future.result()

    try:
        shutil.rmtree(staging)
    except OSError as e:
        raise FilesystemError(
            f"Failed to remove staging directory {staging}: {e}",
            path=staging,
            cause=e
        ) from e

    logger.info("Extracted template into %s", destination)
    return destination


def fetch_and_extract(
    url: str,
    destination: Union[str, Path],
    overwrite: bool = False,
    fetcher: Optional[TemplateFetcher] = None,
) -> Path:
    """
    Download the template at ``url`` and unpack it into ``destination``.

    The destination is checked before any network traffic so that an
    existing directory fails fast, and nothing is written when the download
    fails.
    """
    destination = Path(destination)
    if not overwrite and destination.exists():
        raise ExistsError(
            f"Destination path already exists ({destination}).",
            path=destination
        )

    fetcher = fetcher or TemplateFetcher()
    data = fetcher.fetch(url)
    return extract_archive(
        data,
        destination,
        overwrite=overwrite,
        max_workers=fetcher.config.max_workers,
    )
