"""Proxy selection mirroring the platform default selector."""

from __future__ import annotations

import logging
import urllib.request
from typing import List, Mapping, Optional, Sequence
from urllib.parse import urlsplit

from provisioner.domain.constants import DIRECT

log = logging.getLogger(__name__)


class ProxySelector:
    """Return the ordered proxies to try for a URL; ``None`` means direct."""

    def __init__(
        self,
        configured: Sequence[str] = (),
        environment: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.configured = [proxy.strip() for proxy in configured if proxy.strip()]
        self._environment = environment

    def select(self, url: str) -> List[Optional[str]]:
        if self.configured:
            return [None if proxy.upper() == DIRECT else proxy for proxy in self.configured]

        proxies = dict(self._environment if self._environment is not None else urllib.request.getproxies())
        parts = urlsplit(url)
        proxy = proxies.get(parts.scheme) or proxies.get("all")
        if not proxy:
            return [None]
        host = parts.hostname or ""
        if host and urllib.request.proxy_bypass_environment(host, proxies):
            log.debug("Host %s bypasses proxy %s", host, proxy)
            return [None]
        return [proxy]
