"""Tests for agent schema models and Markdown rendering."""

import pytest
import yaml
from pydantic import ValidationError

from codemap.agent_schema import (
    DEFAULT_VOTE_THRESHOLD,
    Agent,
    AgentColor,
    AgentExample,
    AgentModel,
    ConsensusRole,
    PermissionMode,
)


def split_markdown(markdown: str) -> tuple[dict, str]:
    """Split a rendered file into its parsed frontmatter and body."""
    _, header, body = markdown.split("---\n", 2)
    return yaml.safe_load(header), body


class TestEnumParsing:
    """Tests for the lenient enum parsers."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("purple", AgentColor.PURPLE),
            ("RED", AgentColor.RED),
            ("magenta", AgentColor.BLUE),
        ],
    )
    def test_color(self, text: str, expected: AgentColor) -> None:
        """Verify colors parse case-insensitively, falling back to blue."""
        # When/Then
        assert AgentColor.parse(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("opus", AgentModel.OPUS),
            ("Haiku", AgentModel.HAIKU),
            ("gpt", AgentModel.INHERIT),
        ],
    )
    def test_model(self, text: str, expected: AgentModel) -> None:
        """Verify models parse case-insensitively, falling back to inherit."""
        # When/Then
        assert AgentModel.parse(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("acceptEdits", PermissionMode.ACCEPT_EDITS),
            ("accept_edits", PermissionMode.ACCEPT_EDITS),
            ("ACCEPTEDITS", PermissionMode.ACCEPT_EDITS),
            ("dont_ask", PermissionMode.DONT_ASK),
            ("bypassPermissions", PermissionMode.BYPASS_PERMISSIONS),
            ("plan", PermissionMode.PLAN),
            ("whatever", PermissionMode.DEFAULT),
        ],
    )
    def test_permission_mode(self, text: str, expected: PermissionMode) -> None:
        """Verify permission modes ignore case and underscores."""
        # When/Then
        assert PermissionMode.parse(text) == expected


class TestConsensusRole:
    """Tests for ConsensusRole."""

    def test_defaults(self) -> None:
        """Verify veto and threshold defaults."""
        # When
        role = ConsensusRole(priority=50)

        # Then
        assert role.priority == 50
        assert role.can_veto is False
        assert role.vote_threshold == DEFAULT_VOTE_THRESHOLD

    def test_priority_is_required(self) -> None:
        """Verify a consensus block without priority fails validation."""
        # When/Then
        with pytest.raises(ValidationError, match="priority"):
            Agent.model_validate(
                {
                    "name": "reviewer",
                    "description": "Reviews code",
                    "prompt": "Review.",
                    "consensus": {"can_veto": True},
                }
            )

    @pytest.mark.parametrize(
        "fields",
        [
            {"priority": 256},
            {"priority": -1},
            {"priority": 50, "vote_threshold": 1.5},
        ],
    )
    def test_out_of_range_values_are_rejected(self, fields: dict) -> None:
        """Verify priority and threshold bounds are enforced."""
        # When/Then
        with pytest.raises(ValidationError):
            ConsensusRole(**fields)


class TestAgentMarkdown:
    """Tests for Agent.to_markdown."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.agent = Agent(
            name="code-reviewer",
            description="Reviews code changes",
            color=AgentColor.GREEN,
            tools=["Read", "Grep"],
            model=AgentModel.SONNET,
            permission_mode=PermissionMode.ACCEPT_EDITS,
            skills=["rust-expert"],
            prompt="You review code.\n",
        )

    def test_output_path(self) -> None:
        """Verify agents are written to <name>.md."""
        # When/Then
        assert self.agent.output_path() == "code-reviewer.md"

    def test_frontmatter_fields(self) -> None:
        """Verify settings are rendered into the frontmatter."""
        # When
        frontmatter, body = split_markdown(self.agent.to_markdown())

        # Then
        assert frontmatter == {
            "name": "code-reviewer",
            "description": "Reviews code changes",
            "tools": "Read, Grep",
            "model": "sonnet",
            "permissionMode": "acceptEdits",
            "skills": "rust-expert",
            "color": "green",
        }
        assert body.strip() == "You review code."

    def test_minimal_agent_omits_unset_fields(self) -> None:
        """Verify only name and description appear for a bare agent."""
        # Given
        agent = Agent(name="helper", description="Helps", prompt="Help.")

        # When
        frontmatter, _ = split_markdown(agent.to_markdown())

        # Then
        assert frontmatter == {"name": "helper", "description": "Helps"}

    def test_consensus_is_nested(self) -> None:
        """Verify the consensus role renders as a nested mapping."""
        # Given
        self.agent.consensus = ConsensusRole(priority=90, can_veto=True)

        # When
        frontmatter, _ = split_markdown(self.agent.to_markdown())

        # Then
        assert frontmatter["consensus"] == {
            "priority": 90,
            "can_veto": True,
            "vote_threshold": DEFAULT_VOTE_THRESHOLD,
        }

    def test_examples_section(self) -> None:
        """Verify examples are appended after the prompt."""
        # Given
        self.agent.examples = [
            AgentExample(
                context="A pull request touches auth",
                user="Review my change",
                assistant="Checking token handling first.",
                commentary="Security-sensitive module",
            )
        ]

        # When
        _, body = split_markdown(self.agent.to_markdown())

        # Then
        assert body.index("You review code.") < body.index("## Examples")
        assert "Context: A pull request touches auth" in body
        assert "<commentary>Security-sensitive module</commentary>" in body
        assert body.rstrip().endswith("</example>")

    def test_description_with_colon_is_quoted_safely(self) -> None:
        """Verify YAML-special characters survive rendering."""
        # Given
        agent = Agent(name="helper", description="Use when: tests fail", prompt="Help.")

        # When
        frontmatter, _ = split_markdown(agent.to_markdown())

        # Then
        assert frontmatter["description"] == "Use when: tests fail"
