"""Schema registry for codemap documents.

The registry is the gate between serialized text and the typed document
model: it parses a document, then accepts it only if its schema version
is compatible with the version this build supports.
"""

import re
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from codemap.errors import (
    IncompatibleVersionError,
    MalformedVersionError,
    ParseError,
    format_validation_errors,
)
from codemap.manifest_schema import ProjectManifest
from codemap.module_map_schema import SCHEMA_VERSION, ModuleMap

# MAJOR.MINOR.PATCH, non-negative integers without leading zeros.
# Pre-release and build suffixes are not accepted.
VERSION_PATTERN = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")

DocumentT = TypeVar("DocumentT", bound=BaseModel)


@dataclass(frozen=True, order=True)
class SchemaVersion:
    """Semantic version triple of a schema."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "SchemaVersion":
        """Parse a MAJOR.MINOR.PATCH string.

        Raises:
            MalformedVersionError: If text is not exactly three dot-separated
                non-negative integers.
        """
        match = VERSION_PATTERN.fullmatch(text)
        if match is None:
            raise MalformedVersionError(text)
        major, minor, patch = (int(part) for part in match.groups())
        return cls(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def is_compatible(found: SchemaVersion, supported: SchemaVersion) -> bool:
    """Check whether a document version can be read by a supported version.

    Versions are compatible when their major components are equal; minor
    and patch differences are always accepted.
    """
    return found.major == supported.major


class SchemaRegistry:
    """Loads documents, rejecting those with an incompatible schema version.

    The supported version is fixed for the build (SCHEMA_VERSION). The
    registry keeps no state between loads, so one instance can be shared
    freely.
    """

    __slots__ = ("_current_version",)

    def __init__(self) -> None:
        self._current_version = SchemaVersion.parse(SCHEMA_VERSION)

    def version(self) -> SchemaVersion:
        """Return the schema version this build supports."""
        return self._current_version

    def load(self, raw: str | bytes) -> ModuleMap:
        """Load a module map document from JSON text.

        Checks run in order: structural parse, version extraction, version
        compatibility. A document failing any step is discarded.

        Args:
            raw: JSON text of a module map.

        Returns:
            The validated ModuleMap, with absent optional fields defaulted.

        Raises:
            ParseError: If raw is not valid JSON or does not match the schema.
            MalformedVersionError: If schema_version is not MAJOR.MINOR.PATCH.
            IncompatibleVersionError: If the major version is not supported.
        """
        document = _parse(ModuleMap, raw, "module map")
        self._check_version(document.schema_version)
        return document

    def load_manifest(self, raw: str | bytes) -> ProjectManifest:
        """Load a project manifest document from JSON text.

        The version checked is the one of the embedded module map
        (project.schema_version). Raises the same errors as load().
        """
        manifest = _parse(ProjectManifest, raw, "project manifest")
        self._check_version(manifest.project.schema_version)
        return manifest

    def _check_version(self, raw_version: str) -> None:
        found = SchemaVersion.parse(raw_version)
        if not is_compatible(found, self._current_version):
            raise IncompatibleVersionError(
                found=raw_version,
                required_major=self._current_version.major,
            )


def _parse(model: type[DocumentT], raw: str | bytes, label: str) -> DocumentT:
    """Deserialize raw JSON into model, converting failures to ParseError."""
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        clean_errors = format_validation_errors(e)
        msg = f"Invalid {label}: {clean_errors}"
        raise ParseError(msg) from e
