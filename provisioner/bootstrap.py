"""Wiring of the provisioning services and the startup hook."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .domain import ProvisioningReport
from .fileget import CacheStore, ProxyAwareFetcher, ProxySelector
from .fileget.fetcher import ClientFactory
from .logging_config import configure_logging
from .service import ArchiveExpander, LocationResolver, LocationResolverPlugin, ProvisioningDriver
from .settings import Settings, get_settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires the provisioning services with shared settings."""

    settings: Settings
    plugin: Optional[LocationResolverPlugin] = None
    client_factory: Optional[ClientFactory] = None
    proxy_selector: ProxySelector = field(init=False)
    cache: CacheStore = field(init=False)
    fetcher: ProxyAwareFetcher = field(init=False)
    resolver: LocationResolver = field(init=False)
    expander: ArchiveExpander = field(init=False)
    driver: ProvisioningDriver = field(init=False)

    def __post_init__(self) -> None:
        self.proxy_selector = ProxySelector(self.settings.proxies)
        self.cache = CacheStore.from_settings(self.settings)
        self.fetcher = ProxyAwareFetcher(
            self.settings,
            selector=self.proxy_selector,
            client_factory=self.client_factory,
        )
        self.resolver = LocationResolver(
            self.settings,
            cache=self.cache,
            fetcher=self.fetcher,
            plugin=self.plugin,
        )
        self.expander = ArchiveExpander(self.settings, self.resolver)
        self.driver = ProvisioningDriver(self.settings, self.resolver, self.expander)


def bootstrap_provisioning(container: ServiceContainer) -> Optional[ProvisioningReport]:
    """Run the startup provisioning step."""

    configure_logging(container.settings.log_level)
    log.info("...................PROVISIONING-BEGIN...................")
    report = container.driver.add_additional_libraries()
    if report is None:
        log.info("no provisioning configuration found, skip additional libraries")
    log.info("...................PROVISIONING-END...................")
    return report


def add_additional_libraries(
    settings: Optional[Settings] = None,
    plugin: Optional[LocationResolverPlugin] = None,
) -> Optional[ProvisioningReport]:
    """One-call entry point for host processes."""
    return bootstrap_provisioning(ServiceContainer(settings or get_settings(), plugin=plugin))


def resolve(raw_location: str, settings: Optional[Settings] = None) -> str:
    """Resolve one raw location with a container built from ``settings``."""
    return ServiceContainer(settings or get_settings()).resolver.resolve(raw_location)
