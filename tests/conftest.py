"""Shared test fixtures for codemap tests."""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from codemap.module_map_schema import (
    SCHEMA_VERSION,
    Module,
    ModuleMap,
    ProjectCommands,
    ProjectMetadata,
    WorkspaceInfo,
)
from codemap.types_schema import (
    Convention,
    EvidenceLocation,
    GeneratorInfo,
    IssueCategory,
    IssueSeverity,
    KnownIssue,
    ModuleDependency,
    ProjectType,
    TechStack,
    WorkspaceType,
)


def minimal_module_map_data(schema_version: str = SCHEMA_VERSION) -> dict[str, Any]:
    """Build the smallest valid module map document as a dict.

    Only required fields are present; every optional field is left out.
    """
    return {
        "schema_version": schema_version,
        "generator": {"name": "test", "version": "1.0.0"},
        "project": {
            "name": "test",
            "workspace": {},
            "tech_stack": {"primary_language": "rust"},
            "languages": [],
            "total_files": 0,
        },
        "modules": [],
        "generated_at": "2026-01-29T00:00:00Z",
    }


def minimal_manifest_data(schema_version: str = SCHEMA_VERSION) -> dict[str, Any]:
    """Build the smallest valid project manifest document as a dict."""
    return {
        "version": "2.0.0",
        "created_at": "2026-01-29T00:00:00Z",
        "generator": "codemap",
        "project": minimal_module_map_data(schema_version),
    }


def to_json_text(data: dict[str, Any]) -> str:
    """Serialize a document dict the way a producer would."""
    return json.dumps(data)


def write_document(path: Path, data: dict[str, Any]) -> Path:
    """Write a document dict to a JSON file and return its path."""
    path.write_text(to_json_text(data))
    return path


def sample_module(module_id: str) -> Module:
    """Module with only the required fields and fixed metrics."""
    return Module(
        id=module_id,
        name=module_id,
        paths=[f"src/{module_id}/"],
        responsibility=f"{module_id} module",
        primary_language="rust",
        coverage_ratio=0.8,
        value_score=0.7,
        risk_score=0.3,
    )


def sample_module_with_conventions(module_id: str) -> Module:
    """Module with key files, dependencies, conventions, issues, and evidence."""
    return Module(
        id=module_id,
        name=module_id,
        paths=[f"src/{module_id}/"],
        key_files=[f"src/{module_id}/mod.rs"],
        dependencies=[ModuleDependency(module_id="types")],
        dependents=["cli"],
        responsibility=f"{module_id} module",
        primary_language="rust",
        coverage_ratio=0.8,
        value_score=0.7,
        risk_score=0.3,
        conventions=[Convention(name="error-handling", pattern="Use ? operator for propagation")],
        known_issues=[
            KnownIssue(
                id="memory-leak",
                description="Unbounded cache growth",
                severity=IssueSeverity.MEDIUM,
                category=IssueCategory.PERFORMANCE,
                prevention="Add TTL or max size limit",
            )
        ],
        evidence=[EvidenceLocation.at(f"src/{module_id}/mod.rs", 1)],
    )


def sample_project() -> ProjectMetadata:
    """Fully populated project metadata."""
    return ProjectMetadata(
        name="test-project",
        project_type=ProjectType.CLI,
        description="A test project",
        workspace=WorkspaceInfo(workspace_type=WorkspaceType.SINGLE_PACKAGE, root="."),
        tech_stack=TechStack(primary_language="rust", language_version="1.92"),
        languages=[],
        total_files=100,
        commands=ProjectCommands(
            build="cargo build",
            test="cargo test",
            lint="cargo clippy",
            format="cargo fmt",
        ),
    )


def sample_module_map(modules: list[Module] | None = None) -> ModuleMap:
    """Module map of sample_project() with the given modules."""
    return ModuleMap.create(
        generator=GeneratorInfo(name="test", version="1.0.0"),
        project=sample_project(),
        modules=modules,
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()
