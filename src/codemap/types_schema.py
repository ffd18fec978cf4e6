"""Shared schema types using Pydantic.

This module defines the value types and enumerations used across the
module map, manifest, and plugin schemas.
"""

from enum import Enum
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class SchemaModel(BaseModel):
    """Base model for all schema records.

    Unknown keys are ignored so documents written by a newer minor version
    still load. Optional fields left at None or an empty list/dict are
    omitted when serializing; required fields are always emitted. A nested
    record that is present is emitted even when all its fields are empty.
    """

    model_config = ConfigDict(extra="ignore")

    @model_serializer(mode="wrap")
    def _omit_empty_optionals(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if field.is_required():
                continue
            # Checked on the attribute, not the dumped value: an empty
            # nested record also dumps to {}.
            value = getattr(self, name)
            if value is None or (isinstance(value, (list, dict)) and not value):
                for key in (name, field.alias):
                    if key is not None:
                        data.pop(key, None)
        return data


class WorkspaceType(str, Enum):
    """Layout of the repository workspace."""

    SINGLE_PACKAGE = "single_package"
    MONOREPO = "monorepo"
    MICROSERVICES = "microservices"
    MULTI_PACKAGE = "multi_package"


class ProjectType(str, Enum):
    """Kind of project being described."""

    APPLICATION = "application"
    LIBRARY = "library"
    SERVICE = "service"
    CLI = "cli"


class DependencyType(str, Enum):
    """Kind of dependency between two modules."""

    RUNTIME = "runtime"
    BUILD = "build"
    TEST = "test"
    OPTIONAL = "optional"


class ModuleDependency(SchemaModel):
    """Dependency of a module on another module."""

    module_id: str = Field(description="Identifier of the module depended on")
    dependency_type: DependencyType = Field(
        default=DependencyType.RUNTIME,
        description="Kind of dependency",
    )


class EvidenceLocation(SchemaModel):
    """Source location cited as evidence for a convention or issue.

    A location covers a single line or an inclusive line range. When
    end_line is omitted it equals start_line.
    """

    file: str = Field(default="", description="Path of the cited file")
    start_line: int = Field(default=0, ge=0, description="First cited line")
    end_line: int = Field(default=0, ge=0, description="Last cited line (inclusive)")
    start_column: int | None = Field(default=None, ge=0, description="First cited column")
    end_column: int | None = Field(default=None, ge=0, description="Last cited column")

    @model_validator(mode="before")
    @classmethod
    def default_end_line(cls, data: Any) -> Any:
        """Treat a missing end_line as a single-line location."""
        if isinstance(data, dict) and "end_line" not in data and "start_line" in data:
            data = {**data, "end_line": data["start_line"]}
        return data

    @model_validator(mode="after")
    def validate_line_order(self) -> "EvidenceLocation":
        """Reject ranges whose start lies after their end."""
        if self.start_line > self.end_line:
            msg = f"start_line {self.start_line} is after end_line {self.end_line}"
            raise ValueError(msg)
        return self

    @classmethod
    def at(cls, file: str, line: int) -> "EvidenceLocation":
        """Create a single-line location."""
        return cls(file=file, start_line=line, end_line=line)

    @classmethod
    def span(cls, file: str, start_line: int, end_line: int) -> "EvidenceLocation":
        """Create an inclusive line-range location.

        Raises:
            ValueError: If start_line is greater than end_line.
        """
        return cls(file=file, start_line=start_line, end_line=end_line)

    def to_reference(self) -> str:
        """Render as ``path:line`` or ``path:start-end``."""
        if self.end_line != self.start_line:
            return f"{self.file}:{self.start_line}-{self.end_line}"
        return f"{self.file}:{self.start_line}"

    def __str__(self) -> str:
        return self.to_reference()


class GeneratorInfo(SchemaModel):
    """Tool that produced a document."""

    name: str = Field(description="Generator name")
    version: str = Field(description="Generator version")


_SEVERITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}


class IssueSeverity(str, Enum):
    """Severity of a known issue, ordered from most to least severe."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Position in severity order (0 = most severe)."""
        return _SEVERITY_RANK[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IssueSeverity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, IssueSeverity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, IssueSeverity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, IssueSeverity):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value.upper()


class IssueCategory(str, Enum):
    """Area a known issue belongs to."""

    SECURITY = "security"
    PERFORMANCE = "performance"
    CORRECTNESS = "correctness"
    MAINTAINABILITY = "maintainability"
    CONCURRENCY = "concurrency"
    COMPATIBILITY = "compatibility"


class Convention(SchemaModel):
    """Coding convention observed in a module."""

    name: str = Field(description="Convention name")
    pattern: str = Field(description="What the convention prescribes")
    rationale: str | None = Field(default=None, description="Why the convention exists")
    evidence: list[EvidenceLocation] = Field(
        default_factory=list,
        description="Locations demonstrating the convention",
    )

    def __str__(self) -> str:
        return f"{self.name}: {self.pattern}"


class KnownIssue(SchemaModel):
    """Known problem in a module."""

    id: str = Field(description="Issue identifier")
    description: str = Field(description="What is wrong")
    severity: IssueSeverity = Field(description="How severe the issue is")
    category: IssueCategory = Field(description="Issue category")
    prevention: str | None = Field(default=None, description="How to avoid the issue")
    evidence: list[EvidenceLocation] = Field(
        default_factory=list,
        description="Locations exhibiting the issue",
    )

    def __str__(self) -> str:
        return f"[{self.severity!s}] {self.id}: {self.description}"


class FrameworkInfo(SchemaModel):
    """Framework used by the project."""

    name: str = Field(description="Framework name")
    version: str | None = Field(default=None, description="Framework version")
    purpose: str = Field(description="What the framework is used for")
    paths: list[str] = Field(
        default_factory=list,
        description="Paths where the framework is used",
    )


class LibraryInfo(SchemaModel):
    """Key library used by the project."""

    name: str = Field(description="Library name")
    purpose: str = Field(description="What the library is used for")


class TechStack(SchemaModel):
    """Technology stack of the project."""

    primary_language: str = Field(description="Main implementation language")
    language_version: str | None = Field(default=None, description="Language version")
    frameworks: list[FrameworkInfo] = Field(default_factory=list, description="Frameworks")
    build_tools: list[str] = Field(default_factory=list, description="Build tools")
    test_frameworks: list[str] = Field(default_factory=list, description="Test frameworks")
    key_libraries: list[LibraryInfo] = Field(default_factory=list, description="Key libraries")


class DetectedLanguage(SchemaModel):
    """Language detected in the codebase."""

    name: str = Field(description="Language name")
    percentage: float = Field(default=0.0, description="Share of the codebase")
    frameworks: list[str] = Field(default_factory=list, description="Frameworks detected")
    build_tools: list[str] = Field(default_factory=list, description="Build tools detected")
    marker_files: list[str] = Field(
        default_factory=list,
        description="Files that revealed the language (e.g. Cargo.toml)",
    )


def is_path_in_scope(path: str | PurePath, allowed_paths: list[str] | list[PurePath]) -> bool:
    """Check whether path lies under any of the allowed paths.

    Matching is by whole path components, so ``src/auth`` covers
    ``src/auth/login.rs`` but not ``src/authz.rs``.
    """
    candidate = PurePath(path)
    return any(candidate.is_relative_to(PurePath(allowed)) for allowed in allowed_paths)
