"""Archive expansion with a persistent extraction directory per archive."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List
from zipfile import BadZipFile, ZipFile

from provisioner.domain import IOFailure
from provisioner.domain.constants import ARCHIVE_SUFFIX
from provisioner.settings import Settings

from .resolver import LocationResolver

log = logging.getLogger(__name__)


def list_files(directory: Path) -> List[str]:
    """Absolute paths of the regular files below ``directory``.

    Order follows directory enumeration. Unreadable directories contribute
    nothing.
    """
    try:
        entries = list(Path(directory).iterdir())
    except OSError as exc:
        log.debug("Cannot list %s: %s", directory, exc)
        return []

    files: List[str] = []
    for entry in entries:
        if entry.is_symlink() and entry.is_dir():
            continue
        if entry.is_dir():
            files.extend(list_files(entry))
        elif entry.is_file():
            files.append(str(entry.absolute()))
    return files


class ArchiveExpander:
    """Resolve an archive and expand it once under the extraction root.

    An existing extraction directory is trusted as is, even if the archive
    has changed since it was expanded.
    """

    def __init__(self, settings: Settings, resolver: LocationResolver) -> None:
        self.root = settings.extraction_root
        self.resolver = resolver

    def extraction_dir(self, archive: Path) -> Path:
        name = archive.name
        if name.endswith(ARCHIVE_SUFFIX):
            name = name[: -len(ARCHIVE_SUFFIX)]
        return self.root / name

    def expand(self, archive_location: str) -> List[str]:
        archive = Path(self.resolver.resolve(archive_location))
        return self.expand_file(archive)

    def expand_file(self, archive: Path) -> List[str]:
        target = self.extraction_dir(archive)
        if target.exists():
            log.info("Reusing extracted archive %s", target)
            return list_files(target)

        try:
            target.mkdir(parents=True)
        except OSError as exc:
            raise IOFailure(f"Cannot create {target}: {exc}") from exc

        log.info("Extracting %s into %s", archive, target)
        try:
            with ZipFile(archive, "r") as zf:
                zf.extractall(target)
        except (BadZipFile, OSError) as exc:
            shutil.rmtree(target, ignore_errors=True)
            raise IOFailure(f"Cannot extract {archive}: {exc}") from exc
        return list_files(target)
