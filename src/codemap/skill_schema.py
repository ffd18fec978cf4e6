"""Skill schema definitions using Pydantic.

This module defines the schema for skills shipped in a plugin bundle. A
skill renders to a SKILL.md file plus any bundled additional files.
"""

from enum import Enum

from pydantic import Field

from codemap.frontmatter import render_markdown
from codemap.types_schema import SchemaModel

DEFAULT_SKILL_VERSION = "1.0.0"

SKILL_FILENAME = "SKILL.md"


class ContextMode(str, Enum):
    """How a skill's context is set up when it runs."""

    FORK = "fork"

    @classmethod
    def parse(cls, text: str) -> "ContextMode":
        """Parse case-insensitively.

        Raises:
            ValueError: If text names no known context mode.
        """
        try:
            return cls(text.lower())
        except ValueError:
            msg = f"unknown context mode: {text}"
            raise ValueError(msg) from None


class SkillFile(SchemaModel):
    """Additional file bundled with a skill."""

    name: str = Field(description="File name relative to the skill directory")
    content: str = Field(description="File content")


class Skill(SchemaModel):
    """Root schema for skill definitions."""

    name: str = Field(description="Unique identifier (kebab-case)")
    description: str = Field(description="Human-readable description")
    version: str = Field(default=DEFAULT_SKILL_VERSION, description="Skill version")
    allowed_tools: list[str] = Field(default_factory=list, description="Allowed tools")
    model: str | None = Field(default=None, description="Model override")
    context: ContextMode | None = Field(default=None, description="Context execution mode")
    agent: str | None = Field(default=None, description="Agent to delegate to")
    user_invocable: bool | None = Field(
        default=None,
        description="Whether the user can invoke the skill by name",
    )
    argument_hint: str | None = Field(default=None, description="Argument hint shown to users")
    disable_model_invocation: bool | None = Field(
        default=None,
        description="Disable automatic invocation by the model",
    )
    body: str = Field(description="Markdown body")
    additional_files: list[SkillFile] = Field(
        default_factory=list,
        description="Additional files bundled with the skill",
    )

    def to_markdown(self) -> str:
        """Render the SKILL.md file."""
        frontmatter = {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "allowed-tools": ", ".join(self.allowed_tools) or None,
            "model": self.model,
            "context": self.context.value if self.context else None,
            "agent": self.agent,
            "user-invocable": self.user_invocable,
            "argument-hint": self.argument_hint,
            "disable-model-invocation": self.disable_model_invocation,
        }
        return render_markdown(frontmatter, self.body)

    def output_files(self) -> dict[str, str]:
        """Map each file of the skill directory to its content."""
        files = {SKILL_FILENAME: self.to_markdown()}
        for extra in self.additional_files:
            files[extra.name] = extra.content
        return files
