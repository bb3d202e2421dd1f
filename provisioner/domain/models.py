"""Dataclasses describing resolution and provisioning results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional

from .constants import DESTINATION_KEY, JAR_KEY, ZIP_KEY


class ResolutionTier(str, Enum):
    """Which step of the fallback chain produced a path."""

    CACHE = "cache"
    HTTP = "http"
    PLUGIN = "plugin"
    LOCAL_REPOSITORY = "local_repository"
    URL = "url"
    LITERAL = "literal"


@dataclass
class Resolution:
    location: str
    path: str
    tier: ResolutionTier

    @property
    def is_literal(self) -> bool:
        return self.tier is ResolutionTier.LITERAL


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ProvisioningConfig:
    """Content of ``provisioning.properties``."""

    jars: List[str] = field(default_factory=list)
    zips: List[str] = field(default_factory=list)
    destination: Optional[Path] = None

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "ProvisioningConfig":
        destination = properties.get(DESTINATION_KEY)
        return cls(
            jars=_split_list(properties.get(JAR_KEY)),
            zips=_split_list(properties.get(ZIP_KEY)),
            destination=Path(destination) if destination else None,
        )


@dataclass
class ProvisioningReport:
    destination: Path
    candidates: List[str] = field(default_factory=list)
    copied: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
