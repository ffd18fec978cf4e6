"""JSON Schema export for codemap documents.

The schemas are generated from the Pydantic models and can be used with
any JSON Schema validator.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from codemap.agent_schema import Agent
from codemap.manifest_schema import ProjectManifest
from codemap.module_map_schema import SCHEMA_VERSION, ModuleMap
from codemap.rule_schema import Rule
from codemap.skill_schema import Skill

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


@dataclass(frozen=True)
class SchemaDescriptor:
    """Describes an exportable document schema."""

    kind: str
    model: type[BaseModel]
    description: str

    @property
    def filename(self) -> str:
        return f"{self.kind}.schema.json"


_DESCRIPTORS: dict[str, SchemaDescriptor] = {
    descriptor.kind: descriptor
    for descriptor in (
        SchemaDescriptor(
            kind="module-map",
            model=ModuleMap,
            description="Structure of a codebase: modules, groups, and dependencies.",
        ),
        SchemaDescriptor(
            kind="manifest",
            model=ProjectManifest,
            description="Module map plus generated rules, skills, agents, and context.",
        ),
        SchemaDescriptor(
            kind="agent",
            model=Agent,
            description="Agent definition of a plugin bundle.",
        ),
        SchemaDescriptor(
            kind="rule",
            model=Rule,
            description="Context rule of a plugin bundle.",
        ),
        SchemaDescriptor(
            kind="skill",
            model=Skill,
            description="Skill definition of a plugin bundle.",
        ),
    )
}


def schema_kinds() -> list[str]:
    """Names of the exportable document kinds."""
    return list(_DESCRIPTORS)


def get_schema_descriptor(kind: str) -> SchemaDescriptor:
    """Look up a schema descriptor by kind.

    Raises:
        KeyError: If kind is not a known document kind.
    """
    try:
        return _DESCRIPTORS[kind]
    except KeyError:
        known = ", ".join(_DESCRIPTORS)
        msg = f"Unknown schema kind '{kind}' (known: {known})"
        raise KeyError(msg) from None


def export_json_schema(kind: str) -> dict[str, Any]:
    """Generate the JSON Schema of a document kind."""
    descriptor = get_schema_descriptor(kind)
    generated = descriptor.model.model_json_schema(by_alias=True)
    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "$comment": f"codemap schema version {SCHEMA_VERSION}",
        **generated,
        "description": descriptor.description,
    }


def write_json_schemas(directory: Path) -> list[Path]:
    """Write the JSON Schema of every document kind into directory.

    Creates the directory if needed.

    Returns:
        Paths of the written files, in kind order.
    """
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for descriptor in _DESCRIPTORS.values():
        path = directory / descriptor.filename
        path.write_text(json.dumps(export_json_schema(descriptor.kind), indent=2) + "\n")
        written.append(path)
    return written
