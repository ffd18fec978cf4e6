"""Module map schema definitions using Pydantic.

This module defines the root document describing a codebase: project
metadata, the modules it is made of, how they group together, and the
dependency graph between them.
"""

from datetime import datetime, timezone

from pydantic import ConfigDict, Field

from codemap.types_schema import (
    Convention,
    DependencyType,
    DetectedLanguage,
    EvidenceLocation,
    GeneratorInfo,
    KnownIssue,
    ModuleDependency,
    ProjectType,
    SchemaModel,
    TechStack,
    WorkspaceType,
)

# Schema version - bump the major component for breaking changes only
SCHEMA_VERSION = "1.0.0"


class WorkspaceInfo(SchemaModel):
    """Workspace layout of the project."""

    workspace_type: WorkspaceType = Field(
        default=WorkspaceType.SINGLE_PACKAGE,
        description="Workspace layout",
    )
    root: str | None = Field(default=None, description="Workspace root directory")


class ProjectCommands(SchemaModel):
    """Commands used to build and check the project."""

    build: str = Field(description="Build command")
    test: str = Field(description="Test command")
    lint: str | None = Field(default=None, description="Lint command")
    format: str | None = Field(default=None, description="Format command")


class ProjectMetadata(SchemaModel):
    """Metadata about the described project."""

    name: str = Field(description="Project name")
    project_type: ProjectType = Field(
        default=ProjectType.APPLICATION,
        description="Kind of project",
    )
    description: str | None = Field(default=None, description="Project description")
    repository: str | None = Field(default=None, description="Repository URL")
    workspace: WorkspaceInfo = Field(description="Workspace layout")
    tech_stack: TechStack = Field(description="Technology stack")
    languages: list[DetectedLanguage] = Field(description="Languages detected in the codebase")
    total_files: int = Field(ge=0, description="Number of source files")
    commands: ProjectCommands | None = Field(default=None, description="Project commands")


class ModuleMetrics(SchemaModel):
    """Scores attached to a module."""

    coverage_ratio: float = Field(default=0.0, description="Test coverage ratio")
    value_score: float = Field(default=0.0, description="Business value score")
    risk_score: float = Field(default=0.0, description="Change risk score")

    def priority_score(self) -> float:
        """Weighted priority: 60% value, 40% risk."""
        return self.value_score * 0.6 + self.risk_score * 0.4


class Module(SchemaModel):
    """A cohesive unit of the codebase.

    Metric scores are stored inline on the module rather than nested;
    use the metrics property to work with them as a ModuleMetrics.
    """

    id: str = Field(description="Module identifier")
    name: str = Field(description="Module display name")
    paths: list[str] = Field(description="Path prefixes owned by the module")
    key_files: list[str] = Field(default_factory=list, description="Most important files")
    dependencies: list[ModuleDependency] = Field(
        default_factory=list,
        description="Modules this module depends on",
    )
    dependents: list[str] = Field(
        default_factory=list,
        description="Identifiers of modules depending on this one",
    )
    responsibility: str = Field(description="What the module is responsible for")
    primary_language: str = Field(description="Main language of the module")
    coverage_ratio: float = Field(default=0.0, description="Test coverage ratio")
    value_score: float = Field(default=0.0, description="Business value score")
    risk_score: float = Field(default=0.0, description="Change risk score")
    conventions: list[Convention] = Field(default_factory=list, description="Conventions")
    known_issues: list[KnownIssue] = Field(default_factory=list, description="Known issues")
    evidence: list[EvidenceLocation] = Field(default_factory=list, description="Evidence")

    @property
    def metrics(self) -> ModuleMetrics:
        """Metric scores of this module."""
        return ModuleMetrics(
            coverage_ratio=self.coverage_ratio,
            value_score=self.value_score,
            risk_score=self.risk_score,
        )

    def contains_file(self, path: str) -> bool:
        """Check whether a file path falls under one of the module's paths."""
        return any(path.startswith(prefix) for prefix in self.paths)


class ModuleGroup(SchemaModel):
    """Set of modules sharing a responsibility."""

    id: str = Field(description="Group identifier")
    name: str = Field(description="Group display name")
    module_ids: list[str] = Field(description="Identifiers of member modules")
    responsibility: str = Field(description="What the group is responsible for")
    boundary_rules: list[str] = Field(
        default_factory=list,
        description="Rules members must follow at the group boundary",
    )
    leader_module: str | None = Field(default=None, description="Main module of the group")


class DependencyEdge(SchemaModel):
    """Directed dependency between two modules."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_: str = Field(alias="from", description="Depending module")
    to: str = Field(description="Module depended on")
    edge_type: DependencyType = Field(
        default=DependencyType.RUNTIME,
        description="Kind of dependency",
    )


class ArchitectureLayer(SchemaModel):
    """Named architectural layer and the modules in it."""

    name: str = Field(description="Layer name")
    modules: list[str] = Field(description="Identifiers of modules in the layer")


class DependencyGraph(SchemaModel):
    """Module dependency graph."""

    edges: list[DependencyEdge] = Field(default_factory=list, description="Dependency edges")
    layers: list[ArchitectureLayer] = Field(
        default_factory=list,
        description="Architecture layers",
    )


class ModuleMap(SchemaModel):
    """Root schema for module map documents."""

    schema_version: str = Field(description="Schema version in MAJOR.MINOR.PATCH format")
    generator: GeneratorInfo = Field(description="Tool that produced the document")
    project: ProjectMetadata = Field(description="Project metadata")
    modules: list[Module] = Field(description="Modules of the project")
    groups: list[ModuleGroup] = Field(default_factory=list, description="Module groups")
    dependency_graph: DependencyGraph | None = Field(
        default=None,
        description="Module dependency graph",
    )
    generated_at: datetime = Field(description="UTC time the document was generated")

    @classmethod
    def create(
        cls,
        generator: GeneratorInfo,
        project: ProjectMetadata,
        modules: list[Module] | None = None,
        groups: list[ModuleGroup] | None = None,
        dependency_graph: DependencyGraph | None = None,
    ) -> "ModuleMap":
        """Create a module map stamped with the current schema version and time."""
        return cls(
            schema_version=SCHEMA_VERSION,
            generator=generator,
            project=project,
            modules=modules or [],
            groups=groups or [],
            dependency_graph=dependency_graph,
            generated_at=datetime.now(timezone.utc),
        )

    def find_module(self, module_id: str) -> Module | None:
        return next((m for m in self.modules if m.id == module_id), None)

    def find_group(self, group_id: str) -> ModuleGroup | None:
        return next((g for g in self.groups if g.id == group_id), None)

    def find_group_containing(self, module_id: str) -> ModuleGroup | None:
        """Find the first group listing module_id as a member."""
        return next((g for g in self.groups if module_id in g.module_ids), None)

    def find_modules_in_group(self, group_id: str) -> list[Module] | None:
        """Resolve the member modules of a group.

        Member identifiers with no matching module are skipped.

        Returns:
            The member modules, or None if the group does not exist.
        """
        group = self.find_group(group_id)
        if group is None:
            return None
        found = (self.find_module(module_id) for module_id in group.module_ids)
        return [module for module in found if module is not None]

    def to_json(self) -> str:
        """Serialize to pretty-printed JSON, omitting empty optional fields."""
        return self.model_dump_json(indent=2, by_alias=True)
