"""Tests for skill schema models and rendering."""

import pytest
import yaml

from codemap.skill_schema import (
    DEFAULT_SKILL_VERSION,
    SKILL_FILENAME,
    ContextMode,
    Skill,
    SkillFile,
)


class TestContextMode:
    """Tests for ContextMode.parse."""

    def test_parses_case_insensitively(self) -> None:
        """Verify known modes parse regardless of case."""
        # When/Then
        assert ContextMode.parse("FORK") == ContextMode.FORK

    def test_unknown_mode_is_rejected(self) -> None:
        """Verify unknown modes raise a readable error."""
        # When/Then
        with pytest.raises(ValueError, match="unknown context mode: inline"):
            ContextMode.parse("inline")


class TestSkillMarkdown:
    """Tests for Skill.to_markdown."""

    def test_minimal_skill(self) -> None:
        """Verify a bare skill renders name, description, and version."""
        # Given
        skill = Skill(name="rust-expert", description="Rust guidance", body="# Rust\n")

        # When
        _, header, body = skill.to_markdown().split("---\n", 2)

        # Then
        assert yaml.safe_load(header) == {
            "name": "rust-expert",
            "description": "Rust guidance",
            "version": DEFAULT_SKILL_VERSION,
        }
        assert body == "\n# Rust\n"

    def test_optional_keys_are_hyphenated(self) -> None:
        """Verify optional settings use hyphenated frontmatter keys."""
        # Given
        skill = Skill(
            name="deploy",
            description="Deploys the service",
            allowed_tools=["Bash", "Read"],
            context=ContextMode.FORK,
            user_invocable=True,
            argument_hint="<environment>",
            disable_model_invocation=False,
            body="Deploy it.",
        )

        # When
        _, header, _ = skill.to_markdown().split("---\n", 2)
        frontmatter = yaml.safe_load(header)

        # Then
        assert frontmatter["allowed-tools"] == "Bash, Read"
        assert frontmatter["context"] == "fork"
        assert frontmatter["user-invocable"] is True
        assert frontmatter["argument-hint"] == "<environment>"
        assert frontmatter["disable-model-invocation"] is False
        assert "agent" not in frontmatter


class TestSkillOutputFiles:
    """Tests for Skill.output_files."""

    def test_includes_skill_file_and_extras(self) -> None:
        """Verify SKILL.md is emitted alongside bundled files."""
        # Given
        skill = Skill(
            name="rust-expert",
            description="Rust guidance",
            body="# Rust",
            additional_files=[SkillFile(name="reference.md", content="# Reference\n")],
        )

        # When
        files = skill.output_files()

        # Then
        assert list(files) == [SKILL_FILENAME, "reference.md"]
        assert files[SKILL_FILENAME] == skill.to_markdown()
        assert files["reference.md"] == "# Reference\n"
