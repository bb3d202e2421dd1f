"""Tiered resolution of raw locations into local files."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import urlsplit
from urllib.request import url2pathname

from provisioner.domain import (
    InvalidCoordinate,
    IOFailure,
    Resolution,
    ResolutionTier,
    artifact_path,
    split_repository,
)
from provisioner.domain.constants import FILE_SCHEME, HTTP_PREFIX, MVN_PREFIX
from provisioner.fileget import CacheStore, ProxyAwareFetcher
from provisioner.fileget.fetcher import CHUNK_SIZE, write_to
from provisioner.settings import Settings

log = logging.getLogger(__name__)

URL_SCHEMES = {"http", "https", FILE_SCHEME}


class LocationResolverPlugin(Protocol):
    """Full resolver that can be plugged in ahead of the coordinate fallback."""

    def resolve(self, raw_location: str) -> str:  # pragma: no cover - interface
        ...


class LocationResolver:
    """Turn a URL, an ``mvn:`` coordinate or a path into a local file path.

    The tiers are tried in order and every failure simply moves on to the
    next one. When nothing works the raw location is returned unchanged, so a
    missing file only surfaces where the path is eventually used.
    """

    def __init__(
        self,
        settings: Settings,
        cache: Optional[CacheStore] = None,
        fetcher: Optional[ProxyAwareFetcher] = None,
        plugin: Optional[LocationResolverPlugin] = None,
    ) -> None:
        self.settings = settings
        self.cache = cache or CacheStore.from_settings(settings)
        self.fetcher = fetcher or ProxyAwareFetcher(settings)
        self.plugin = plugin
        self.max_depth = settings.max_resolution_depth

    def resolve(self, raw_location: str) -> str:
        return self.resolve_location(raw_location).path

    def resolve_location(self, raw_location: str, *, _depth: int = 0) -> Resolution:
        resolution = self._from_http(raw_location) or self._from_plugin(raw_location)
        if resolution is None:
            if raw_location.startswith(MVN_PREFIX):
                resolution = self._from_coordinates(raw_location, _depth)
            else:
                resolution = self._from_url(raw_location)
        if resolution is None:
            log.debug("Using %s as a plain path", raw_location)
            resolution = Resolution(raw_location, raw_location, ResolutionTier.LITERAL)
        return resolution

    def _from_http(self, raw_location: str) -> Optional[Resolution]:
        if not raw_location.startswith(HTTP_PREFIX):
            return None
        cached = self.cache.lookup(raw_location)
        if cached is not None:
            return Resolution(raw_location, str(cached), ResolutionTier.CACHE)
        try:
            path = self.fetcher.copy(raw_location, self.cache.file_for(raw_location))
        except (IOFailure, OSError) as exc:
            log.debug("Download of %s failed: %s", raw_location, exc)
            return None
        if path is None:
            return None
        return Resolution(raw_location, str(path), ResolutionTier.HTTP)

    def _from_plugin(self, raw_location: str) -> Optional[Resolution]:
        if self.plugin is None:
            return None
        try:
            path = self.plugin.resolve(raw_location)
        except Exception as exc:  # noqa: BLE001
            log.debug("Plugin resolver skipped %s: %s", raw_location, exc)
            return None
        return Resolution(raw_location, path, ResolutionTier.PLUGIN)

    def _from_coordinates(self, raw_location: str, depth: int) -> Optional[Resolution]:
        if depth >= self.max_depth:
            log.warning("Giving up on %s after %d nested resolutions", raw_location, depth)
            return None

        repository, coordinate = split_repository(raw_location[len(MVN_PREFIX):])
        try:
            relative = artifact_path(coordinate.replace(":", "/"))
        except InvalidCoordinate as exc:
            log.error("Can't find %s: %s", raw_location, exc)
            return None

        if repository is None:
            local = Path(self.settings.m2_home) / relative
            if local.is_file():
                log.info("Found %s in local repository %s", raw_location, local)
                return Resolution(raw_location, str(local.absolute()), ResolutionTier.LOCAL_REPOSITORY)
            repository = self.settings.default_repository_url
            if not repository.endswith("/"):
                repository += "/"

        url = repository + relative
        log.info("Resolving %s from %s", raw_location, url)
        nested = self.resolve_location(url, _depth=depth + 1)
        if nested.is_literal:
            return None
        return Resolution(raw_location, nested.path, nested.tier)

    def _from_url(self, raw_location: str) -> Optional[Resolution]:
        parts = urlsplit(raw_location)
        if parts.scheme.lower() not in URL_SCHEMES:
            return None
        target = self.cache.file_for(raw_location)
        try:
            if parts.scheme.lower() == FILE_SCHEME:
                path = self._copy_local(Path(url2pathname(parts.path)), target, raw_location)
            else:
                path = self.fetcher.copy(raw_location, target, proxies=[None])
        except (IOFailure, OSError) as exc:
            log.debug("Reading %s as a URL failed: %s", raw_location, exc)
            return None
        if path is None:
            return None
        return Resolution(raw_location, str(path), ResolutionTier.URL)

    @staticmethod
    def _copy_local(source: Path, target: Path, raw_location: str) -> Path:
        with open(source, "rb") as fh:
            write_to(iter(partial(fh.read, CHUNK_SIZE), b""), target, source=raw_location)
        return target.absolute()
