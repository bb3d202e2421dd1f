"""Maven coordinate parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import DEFAULT_TYPE, REPOSITORY_SEPARATOR
from .errors import InvalidCoordinate


@dataclass(frozen=True)
class ArtifactCoordinates:
    """Represents a Maven artifact coordinate."""

    groupid: str
    artifactid: str
    version: str
    extension: str = DEFAULT_TYPE
    classifier: Optional[str] = None

    @property
    def filename(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifactid}-{self.version}{suffix}.{self.extension}"

    @property
    def path_segments(self) -> List[str]:
        group_path = self.groupid.replace(".", "/")
        return [group_path, self.artifactid, self.version, self.filename]

    @property
    def path(self) -> str:
        return "/".join(self.path_segments)


def parse_coordinates(coordinate_path: str) -> ArtifactCoordinates:
    """Parse ``group/artifact/version[/type[/classifier]]``.

    Raises:
        InvalidCoordinate: fewer than three segments, or a blank group,
            artifact or version.
    """
    segments = coordinate_path.split("/")
    if len(segments) < 3:
        raise InvalidCoordinate("Invalid path", coordinate_path)

    group, artifact, version = segments[0], segments[1], segments[2]
    if not group.strip():
        raise InvalidCoordinate("Invalid groupId", coordinate_path)
    if not artifact.strip():
        raise InvalidCoordinate("Invalid artifactId", coordinate_path)
    if not version.strip():
        raise InvalidCoordinate("Invalid version", coordinate_path)

    extension = DEFAULT_TYPE
    if len(segments) >= 4 and segments[3].strip():
        extension = segments[3]

    classifier = None
    if len(segments) >= 5 and segments[4].strip():
        classifier = segments[4]

    return ArtifactCoordinates(
        groupid=group,
        artifactid=artifact,
        version=version,
        extension=extension,
        classifier=classifier,
    )


def artifact_path(coordinate_path: str) -> str:
    """Repository-relative path of a coordinate, e.g. ``g/a/v/a-v.jar``."""
    return parse_coordinates(coordinate_path).path


def split_repository(raw: str) -> Tuple[Optional[str], str]:
    """Split ``repo!coordinate`` on the last separator.

    The repository, when present, is normalized to end with ``/``.
    """
    if REPOSITORY_SEPARATOR not in raw:
        return None, raw
    repo, coordinate = raw.rsplit(REPOSITORY_SEPARATOR, 1)
    if not repo.endswith("/"):
        repo += "/"
    return repo, coordinate
