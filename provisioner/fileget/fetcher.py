"""HTTP fetching that walks the configured proxies."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

import httpx

from provisioner.domain.errors import IOFailure
from provisioner.settings import Settings

from .proxies import ProxySelector

log = logging.getLogger(__name__)

ClientFactory = Callable[[Optional[str], httpx.Timeout], httpx.Client]

CHUNK_SIZE = 65536


def default_client_factory(proxy: Optional[str], timeout: httpx.Timeout) -> httpx.Client:
    return httpx.Client(proxy=proxy, timeout=timeout, follow_redirects=True, trust_env=False)


class RemoteStream:
    """An open response together with the client that owns its connection."""

    def __init__(self, url: str, response: httpx.Response, client: httpx.Client, proxy: Optional[str] = None) -> None:
        self.url = url
        self.response = response
        self.client = client
        self.proxy = proxy

    def iter_bytes(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        return self.response.iter_bytes(chunk_size)

    def close(self) -> None:
        try:
            self.response.close()
        finally:
            self.client.close()

    def __enter__(self) -> "RemoteStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class ProxyAwareFetcher:
    """Open a URL through each proxy in turn and keep the first that answers."""

    def __init__(
        self,
        settings: Settings,
        selector: Optional[ProxySelector] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self.selector = selector or ProxySelector(settings.proxies)
        self.timeout = httpx.Timeout(None, connect=settings.connect_timeout)
        self._client_factory = client_factory or default_client_factory

    def open(self, url: str, proxies: Optional[Sequence[Optional[str]]] = None) -> Optional[RemoteStream]:
        """Return a stream for ``url`` or None when no proxy could reach it.

        The caller owns the returned stream and must close it.
        """
        candidates = list(proxies) if proxies is not None else self.selector.select(url)
        for proxy in candidates:
            client = None
            try:
                client = self._client_factory(proxy, self.timeout)
                response = client.send(client.build_request("GET", url), stream=True)
            except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError, ImportError) as exc:
                if client is not None:
                    client.close()
                log.debug("Fetching %s via %s failed: %s", url, proxy or "direct connection", exc)
                continue
            if response.is_error:
                response.close()
                client.close()
                log.debug("Fetching %s via %s returned HTTP %s", url, proxy or "direct connection", response.status_code)
                continue
            return RemoteStream(url, response, client, proxy)
        log.debug("No connection could fetch %s (tried %d)", url, len(candidates))
        return None

    def copy(
        self,
        url: str,
        destination: Path,
        proxies: Optional[Sequence[Optional[str]]] = None,
    ) -> Optional[Path]:
        """Stream ``url`` into ``destination``; None when it is unreachable."""
        stream = self.open(url, proxies)
        if stream is None:
            return None
        with stream:
            write_to(stream.iter_bytes(), destination, source=url)
        log.info("Fetched %s -> %s", url, destination)
        return destination.absolute()


def write_to(chunks: Iterator[bytes], destination: Path, *, source: str) -> int:
    """Write ``chunks`` to ``destination``, removing the partial file on failure."""
    written = 0
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "wb") as fh:
            for chunk in chunks:
                if not chunk:
                    continue
                fh.write(chunk)
                written += len(chunk)
    except (httpx.HTTPError, OSError) as exc:
        if destination.is_file():
            destination.unlink()
        raise IOFailure(f"Failed to copy {source} to {destination}: {exc}") from exc
    return written
