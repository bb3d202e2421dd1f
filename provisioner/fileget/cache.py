"""Name-keyed cache of fetched files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from provisioner.settings import Settings

log = logging.getLogger(__name__)


def last_part(location: str) -> str:
    """Substring after the last ``/``; the whole location when there is none."""
    idx = location.rfind("/")
    if idx <= 0:
        return location
    return location[idx + 1:]


class CacheStore:
    """Maps raw locations to files under the cache root.

    Entries are keyed by the final path segment only, so two locations ending
    with the same filename share one entry.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheStore":
        return cls(settings.cache_root)

    def cache_file(self, name: str) -> Path:
        return self.root / name

    def file_for(self, location: str) -> Path:
        return self.cache_file(last_part(location))

    def lookup(self, location: str) -> Optional[Path]:
        cached = self.file_for(location)
        if cached.is_file():
            log.info("Reusing cached file %s for %s", cached, location)
            return cached.absolute()
        return None
