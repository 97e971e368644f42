"""Byte source resolution for OSF files and zip-packaged screenplay projects."""

from __future__ import annotations

import zipfile
from collections.abc import Iterable
from pathlib import Path

from osftext.config import get_logger
from osftext.exceptions import DocumentIOError

logger = get_logger(__name__)

PACKAGED_PROJECT_EXTENSIONS = (".fadein",)
DOCUMENT_MEMBER = "document.xml"


def is_packaged_project(
    path: Path | str, extensions: Iterable[str] = PACKAGED_PROJECT_EXTENSIONS
) -> bool:
    """Return True when the file extension names a packaged project.

    The comparison is case-insensitive, so ``Script.FADEIN`` qualifies.
    """
    return Path(path).suffix.lower() in {ext.lower() for ext in extensions}


def read_archive_member(archive_path: Path, member: str = DOCUMENT_MEMBER) -> bytes:
    """Read ``member`` from the zip archive at ``archive_path``.

    A missing member yields empty bytes rather than an error; the XML
    parser then reports the empty document.

    Raises:
        DocumentIOError: If the archive cannot be opened or read
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            if member not in archive.namelist():
                logger.warning(
                    "Packaged project has no document member",
                    archive=str(archive_path),
                    member=member,
                )
                return b""
            data = archive.read(member)
    except (OSError, zipfile.BadZipFile) as e:
        raise DocumentIOError(
            message=f"Cannot read packaged project: {archive_path}",
            hint="Check that the file exists and is a valid zip archive.",
            details={
                "file": str(archive_path),
                "member": member,
                "reason": str(e),
            },
        ) from e

    logger.debug(
        "Extracted document member",
        archive=str(archive_path),
        member=member,
        size=len(data),
    )
    return data


def read_file_bytes(path: Path) -> bytes:
    """Read the raw bytes of a flat OSF file.

    Raises:
        DocumentIOError: If the file cannot be opened or read
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise DocumentIOError(
            message=f"Cannot read screenplay file: {path}",
            hint="Check that the file exists and is readable.",
            details={"file": str(path), "reason": str(e)},
        ) from e


def read_document_source(
    path: Path | str,
    extensions: Iterable[str] = PACKAGED_PROJECT_EXTENSIONS,
    member: str = DOCUMENT_MEMBER,
) -> bytes:
    """Return the OSF XML bytes stored at ``path``.

    Packaged projects are opened as zip archives and ``member`` is
    extracted; any other file is read as-is.
    """
    path = Path(path)
    if is_packaged_project(path, extensions):
        return read_archive_member(path, member)
    return read_file_bytes(path)
