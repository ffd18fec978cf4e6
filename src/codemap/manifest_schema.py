"""Project manifest schema definitions using Pydantic.

The manifest wraps a module map together with the rule, skill, and agent
files generated for the project, and the extra context attached to each
module, group, and domain.
"""

from datetime import datetime, timezone

from pydantic import Field

from codemap.module_map_schema import ModuleMap
from codemap.types_schema import SchemaModel

# Version of the manifest wrapper format itself
MANIFEST_VERSION = "1.0.0"

DEFAULT_GENERATOR = "codemap"


class ModuleContext(SchemaModel):
    """Extra context attached to a single module."""

    rules: list[str] = Field(default_factory=list, description="Rule file references")
    skills: list[str] = Field(default_factory=list, description="Skill names")
    conventions: list[str] = Field(default_factory=list, description="Convention summaries")
    issues: list[str] = Field(default_factory=list, description="Known issue summaries")
    group_id: str | None = Field(default=None, description="Group the module belongs to")
    domain_id: str | None = Field(default=None, description="Domain the module belongs to")

    def is_empty(self) -> bool:
        return not (
            self.rules
            or self.skills
            or self.conventions
            or self.issues
            or self.group_id is not None
            or self.domain_id is not None
        )


class GroupContext(SchemaModel):
    """Extra context attached to a module group."""

    rules: list[str] = Field(default_factory=list, description="Rule file references")
    constraints: list[str] = Field(default_factory=list, description="Group constraints")
    member_modules: list[str] = Field(default_factory=list, description="Member module ids")
    domain_id: str | None = Field(default=None, description="Domain the group belongs to")

    def is_empty(self) -> bool:
        return not (
            self.rules or self.constraints or self.member_modules or self.domain_id is not None
        )


class DomainContext(SchemaModel):
    """Extra context attached to a business domain."""

    rules: list[str] = Field(default_factory=list, description="Rule file references")
    constraints: list[str] = Field(default_factory=list, description="Domain constraints")
    member_groups: list[str] = Field(default_factory=list, description="Member group ids")
    interfaces: list[str] = Field(default_factory=list, description="Public interfaces")

    def is_empty(self) -> bool:
        return not (self.rules or self.constraints or self.member_groups or self.interfaces)


class TrackedFile(SchemaModel):
    """Generated file tracked for change detection."""

    path: str = Field(description="File path")
    hash: str = Field(description="Content hash")
    modified: int = Field(description="Modification time in unix seconds")


class ProjectManifest(SchemaModel):
    """Root schema for project manifest documents.

    The schema version guarding the manifest is the one of the embedded
    module map (project.schema_version).
    """

    version: str = Field(description="Manifest format version")
    created_at: datetime = Field(description="UTC time the manifest was created")
    generator: str = Field(description="Tool that produced the manifest")
    project: ModuleMap = Field(description="Module map of the project")
    rules: list[str] = Field(default_factory=list, description="Generated rule files")
    skills: list[str] = Field(default_factory=list, description="Generated skill files")
    agents: list[str] = Field(default_factory=list, description="Generated agent files")
    modules: dict[str, ModuleContext] = Field(
        default_factory=dict,
        description="Context keyed by module id",
    )
    groups: dict[str, GroupContext] = Field(
        default_factory=dict,
        description="Context keyed by group id",
    )
    domains: dict[str, DomainContext] = Field(
        default_factory=dict,
        description="Context keyed by domain id",
    )
    tracked: list[TrackedFile] = Field(default_factory=list, description="Tracked files")

    @classmethod
    def create(cls, project: ModuleMap, generator: str = DEFAULT_GENERATOR) -> "ProjectManifest":
        """Create an empty manifest for a module map."""
        return cls(
            version=MANIFEST_VERSION,
            created_at=datetime.now(timezone.utc),
            generator=generator,
            project=project,
        )

    def get_module_context(self, module_id: str) -> ModuleContext | None:
        return self.modules.get(module_id)

    def get_group_context(self, group_id: str) -> GroupContext | None:
        return self.groups.get(group_id)

    def get_domain_context(self, domain_id: str) -> DomainContext | None:
        return self.domains.get(domain_id)

    def to_json(self) -> str:
        """Serialize to pretty-printed JSON, omitting empty optional fields."""
        return self.model_dump_json(indent=2, by_alias=True)
