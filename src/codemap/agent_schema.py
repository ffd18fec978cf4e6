"""Agent schema definitions using Pydantic.

This module defines the schema for agent definitions shipped in a plugin
bundle, and renders them as Markdown files with YAML frontmatter.
"""

from enum import Enum

from pydantic import Field

from codemap.frontmatter import render_markdown
from codemap.types_schema import SchemaModel

DEFAULT_VOTE_THRESHOLD = 0.67


class AgentColor(str, Enum):
    """Color used to display the agent."""

    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"
    RED = "red"

    @classmethod
    def parse(cls, text: str) -> "AgentColor":
        """Parse case-insensitively, falling back to blue."""
        try:
            return cls(text.lower())
        except ValueError:
            return cls.BLUE


class AgentModel(str, Enum):
    """Model the agent runs on."""

    SONNET = "sonnet"
    OPUS = "opus"
    HAIKU = "haiku"
    INHERIT = "inherit"

    @classmethod
    def parse(cls, text: str) -> "AgentModel":
        """Parse case-insensitively, falling back to inherit."""
        try:
            return cls(text.lower())
        except ValueError:
            return cls.INHERIT


class PermissionMode(str, Enum):
    """Permission mode for the agent's tool use."""

    DEFAULT = "default"
    ACCEPT_EDITS = "acceptEdits"
    DONT_ASK = "dontAsk"
    BYPASS_PERMISSIONS = "bypassPermissions"
    PLAN = "plan"

    @classmethod
    def parse(cls, text: str) -> "PermissionMode":
        """Parse ignoring case and underscores, falling back to default.

        ``accept_edits``, ``ACCEPTEDITS`` and ``acceptEdits`` all parse to
        ACCEPT_EDITS.
        """
        key = text.lower().replace("_", "")
        for member in cls:
            if member.value.lower() == key:
                return member
        return cls.DEFAULT


class ConsensusRole(SchemaModel):
    """Role of the agent in multi-agent consensus."""

    priority: int = Field(ge=0, le=255, description="Weight in consensus")
    can_veto: bool = Field(default=False, description="Whether the agent can veto decisions")
    vote_threshold: float = Field(
        default=DEFAULT_VOTE_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Required approval ratio",
    )


class AgentExample(SchemaModel):
    """Example interaction included in the agent description."""

    context: str = Field(description="Situation the example applies to")
    user: str = Field(description="User message")
    assistant: str = Field(description="Assistant response")
    commentary: str | None = Field(default=None, description="Why the response is right")


class Agent(SchemaModel):
    """Root schema for agent definitions."""

    name: str = Field(description="Unique identifier (kebab-case)")
    description: str = Field(description="Human-readable description")
    color: AgentColor | None = Field(default=None, description="Display color")
    tools: list[str] = Field(default_factory=list, description="Allowed tools")
    disallowed_tools: list[str] = Field(default_factory=list, description="Disallowed tools")
    model: AgentModel | None = Field(default=None, description="Model override")
    permission_mode: PermissionMode | None = Field(default=None, description="Permission mode")
    skills: list[str] = Field(default_factory=list, description="Skills the agent can use")
    consensus: ConsensusRole | None = Field(default=None, description="Consensus role")
    prompt: str = Field(description="System prompt")
    examples: list[AgentExample] = Field(default_factory=list, description="Example interactions")

    def output_path(self) -> str:
        return f"{self.name}.md"

    def to_markdown(self) -> str:
        """Render as an agent Markdown file.

        The frontmatter carries the agent settings; the body is the system
        prompt followed by the example interactions.
        """
        frontmatter = {
            "name": self.name,
            "description": self.description,
            "tools": ", ".join(self.tools) or None,
            "disallowedTools": ", ".join(self.disallowed_tools) or None,
            "model": self.model.value if self.model else None,
            "permissionMode": self.permission_mode.value if self.permission_mode else None,
            "skills": ", ".join(self.skills) or None,
            "color": self.color.value if self.color else None,
            "consensus": self.consensus.model_dump() if self.consensus else None,
        }
        sections = [self.prompt.rstrip()]
        if self.examples:
            sections.append("## Examples")
            sections.extend(_render_example(example) for example in self.examples)
        return render_markdown(frontmatter, "\n\n".join(sections))


def _render_example(example: AgentExample) -> str:
    lines = [
        "<example>",
        f"Context: {example.context}",
        f"user: {example.user}",
        f"assistant: {example.assistant}",
    ]
    if example.commentary:
        lines.append(f"<commentary>{example.commentary}</commentary>")
    lines.append("</example>")
    return "\n".join(lines)
