"""codemap - versioned schema for describing codebases and plugin bundles."""

from importlib.metadata import version

__version__ = version("codemap-schema")
