from .driver import ProvisioningDriver
from .expander import ArchiveExpander, list_files
from .properties import parse_properties, read_properties
from .resolver import LocationResolver, LocationResolverPlugin

__all__ = [
    "ProvisioningDriver",
    "ArchiveExpander",
    "list_files",
    "parse_properties",
    "read_properties",
    "LocationResolver",
    "LocationResolverPlugin",
]
