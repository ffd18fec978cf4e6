"""Rule schema definitions using Pydantic.

Rules are Markdown knowledge files injected into an assistant's context
when a matching path is edited or a trigger keyword appears. Rules are
organized by category, each with its own priority and output directory.
"""

from enum import Enum

from pydantic import Field

from codemap.frontmatter import render_markdown
from codemap.types_schema import SchemaModel

DEFAULT_RULE_PRIORITY = 50

_CATEGORY_PRIORITY = {
    "project": 100,
    "tech": 90,
    "framework": 85,
    "module": 80,
    "group": 70,
    "domain": 60,
}

_CATEGORY_SUBDIRECTORY = {
    "project": "",
    "tech": "tech",
    "framework": "frameworks",
    "module": "modules",
    "group": "groups",
    "domain": "domains",
}


class RuleCategory(str, Enum):
    """Scope a rule applies to, from widest to narrowest."""

    PROJECT = "project"
    TECH = "tech"
    FRAMEWORK = "framework"
    MODULE = "module"
    GROUP = "group"
    DOMAIN = "domain"

    @property
    def default_priority(self) -> int:
        return _CATEGORY_PRIORITY[self.value]

    @property
    def subdirectory(self) -> str:
        """Directory rules of this category are written to ("" = top level)."""
        return _CATEGORY_SUBDIRECTORY[self.value]


class Rule(SchemaModel):
    """Root schema for rule definitions."""

    name: str = Field(description="Unique identifier (kebab-case)")
    paths: list[str] = Field(default_factory=list, description="Glob patterns for injection")
    triggers: list[str] = Field(default_factory=list, description="Keyword triggers")
    priority: int = Field(
        default=DEFAULT_RULE_PRIORITY,
        ge=0,
        le=255,
        description="Injection priority (higher = injected first)",
    )
    category: RuleCategory = Field(default=RuleCategory.PROJECT, description="Rule category")
    always_inject: bool = Field(default=False, description="Whether to inject unconditionally")
    content: list[str] = Field(description="Markdown content lines")

    @classmethod
    def for_category(
        cls,
        category: RuleCategory,
        name: str,
        content: list[str],
        paths: list[str] | None = None,
        triggers: list[str] | None = None,
    ) -> "Rule":
        """Create a rule with the category's default priority.

        Project rules apply everywhere: they default to the ``**/*`` path
        pattern and are always injected.
        """
        is_project = category is RuleCategory.PROJECT
        if paths is None:
            paths = ["**/*"] if is_project else []
        return cls(
            name=name,
            paths=paths,
            triggers=triggers or [],
            priority=category.default_priority,
            category=category,
            always_inject=is_project,
            content=content,
        )

    def output_path(self) -> str:
        """Relative path of the rule file, e.g. ``modules/auth.md``."""
        subdirectory = self.category.subdirectory
        if not subdirectory:
            return f"{self.name}.md"
        return f"{subdirectory}/{self.name}.md"

    def to_markdown(self) -> str:
        frontmatter = {
            "paths": self.paths,
            "triggers": self.triggers,
            "priority": self.priority,
            "category": self.category.value,
            "always-inject": self.always_inject or None,
        }
        return render_markdown(frontmatter, "\n".join(self.content))
