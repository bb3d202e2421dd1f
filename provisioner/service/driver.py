"""Copies resolved libraries into the additional library folder."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from provisioner.domain import IOFailure, ProvisioningConfig, ProvisioningReport
from provisioner.settings import Settings

from .expander import ArchiveExpander
from .properties import read_properties
from .resolver import LocationResolver

log = logging.getLogger(__name__)


class ProvisioningDriver:
    """Resolve ``jar`` and ``zip`` entries and copy the files to a destination."""

    def __init__(
        self,
        settings: Settings,
        resolver: LocationResolver,
        expander: ArchiveExpander,
    ) -> None:
        self.settings = settings
        self.resolver = resolver
        self.expander = expander

    def add_additional_libraries(self) -> Optional[ProvisioningReport]:
        conf = self.settings.config_file
        if not conf.is_file():
            log.debug("No provisioning configuration at %s", conf)
            return None
        log.info("Provisioning libraries from %s", conf)
        return self.provision(ProvisioningConfig.from_properties(read_properties(conf)))

    def provision(self, config: ProvisioningConfig) -> ProvisioningReport:
        candidates = [self.resolver.resolve(jar) for jar in config.jars]
        for archive in config.zips:
            candidates.extend(self.expander.expand(archive))

        destination = config.destination or self.settings.additional_lib_dir
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(f"Cannot create destination {destination}: {exc}") from exc

        report = ProvisioningReport(destination=destination, candidates=candidates)
        for candidate in candidates:
            source = Path(candidate)
            target = destination / source.name
            if target.exists():
                report.skipped.append(target)
                continue
            try:
                shutil.copyfile(source, target)
            except OSError as exc:
                raise IOFailure(f"Cannot copy {source} to {target}: {exc}") from exc
            report.copied.append(target)

        log.info(
            "Provisioned %s: copied=%d skipped=%d",
            destination,
            len(report.copied),
            len(report.skipped),
        )
        return report
