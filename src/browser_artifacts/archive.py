"""Open exports bundled as the sole member of a zip archive."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import IO

from browser_artifacts.exceptions import ArchiveError

logger = logging.getLogger(__name__)


class SingleFileZip:
    """Binary stream over the only member of a zip file.

    Closing it closes both the member and the archive.
    """

    def __init__(self, archive: zipfile.ZipFile, member: IO[bytes], name: str):
        self._archive = archive
        self._member = member
        self.name = name

    def read(self, size: int = -1) -> bytes:
        return self._member.read(size)

    def readline(self, size: int = -1) -> bytes:
        return self._member.readline(size)

    def __iter__(self):
        return iter(self._member)

    @property
    def closed(self) -> bool:
        return self._member.closed

    def close(self) -> None:
        try:
            self._member.close()
        finally:
            self._archive.close()

    def __enter__(self) -> SingleFileZip:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def open_single_file_zip(path: str | Path) -> tuple[SingleFileZip, str]:
    """Open a zip containing exactly one file.

    Returns the member stream and the member's name.
    """
    try:
        archive = zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Not a zip file: {str(path)!r}") from e

    try:
        infos = archive.infolist()
        if len(infos) != 1:
            raise ArchiveError(f"Zip has {len(infos)} files: {str(path)!r}")
        member = archive.open(infos[0])
    except Exception:
        archive.close()
        raise

    logger.debug("Opened %s from zip %s", infos[0].filename, path)
    return SingleFileZip(archive, member, infos[0].filename), infos[0].filename
