"""CLI configuration resolution.

The document loader itself takes no configuration; these settings only
affect where the CLI writes its output.
"""

import os
from pathlib import Path

# Default JSON Schema export directory, relative to the working directory
DEFAULT_SCHEMA_DIR = Path("schemas")

# Environment variable for a custom export directory
SCHEMA_DIR_ENV_VAR = "CODEMAP_SCHEMA_DIR"


def get_schema_dir() -> Path:
    """Get the JSON Schema export directory.

    Resolution order:
    1. CODEMAP_SCHEMA_DIR environment variable (if set)
    2. Default: ./schemas

    Returns:
        Path to the export directory.
    """
    env_value = os.environ.get(SCHEMA_DIR_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_SCHEMA_DIR
