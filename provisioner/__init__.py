"""Resolve URLs, ``mvn:`` coordinates and paths to local files."""

from .bootstrap import ServiceContainer, add_additional_libraries, bootstrap_provisioning, resolve
from .settings import Settings, get_settings

__all__ = [
    "ServiceContainer",
    "add_additional_libraries",
    "bootstrap_provisioning",
    "resolve",
    "Settings",
    "get_settings",
]
