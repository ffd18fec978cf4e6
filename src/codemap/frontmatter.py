"""Markdown-with-frontmatter rendering for plugin artifacts."""

from typing import Any

import yaml

DELIMITER = "---"


def render_markdown(frontmatter: dict[str, Any], body: str) -> str:
    """Render a YAML frontmatter block followed by a Markdown body.

    Keys whose value is None or an empty collection are left out of the
    frontmatter. Key order is preserved.
    """
    fields = {
        key: value
        for key, value in frontmatter.items()
        if value is not None and value != [] and value != {}
    }
    header = yaml.safe_dump(fields, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return f"{DELIMITER}\n{header}{DELIMITER}\n\n{body.rstrip()}\n"

