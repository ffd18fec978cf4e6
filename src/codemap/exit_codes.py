"""Exit codes for codemap CLI commands."""

# Success
SUCCESS = 0

# Errors
GENERAL_ERROR = 1
INVALID_ARGS = 2
DOCUMENT_NOT_FOUND = 3
DOCUMENT_INVALID = 4
VERSION_MALFORMED = 5
VERSION_INCOMPATIBLE = 6
