from .coordinates import ArtifactCoordinates, artifact_path, parse_coordinates, split_repository
from .errors import InvalidCoordinate, IOFailure, ProvisioningError
from .models import ProvisioningConfig, ProvisioningReport, Resolution, ResolutionTier

__all__ = [
    "ArtifactCoordinates",
    "artifact_path",
    "parse_coordinates",
    "split_repository",
    "InvalidCoordinate",
    "IOFailure",
    "ProvisioningError",
    "ProvisioningConfig",
    "ProvisioningReport",
    "Resolution",
    "ResolutionTier",
]
