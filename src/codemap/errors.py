"""Error types and formatting utilities for codemap.

Defines the errors raised when loading a document and turns Pydantic
validation errors and other exceptions into clean, user-friendly messages.
"""

from pydantic import ValidationError
from rich.markup import escape

from codemap import cli_logger, exit_codes


class SchemaError(Exception):
    """Base class for errors raised while loading a document."""


class ParseError(SchemaError):
    """Raised when the input is not a well-formed document of the expected shape."""


class MalformedVersionError(SchemaError):
    """Raised when schema_version is not a MAJOR.MINOR.PATCH string."""

    def __init__(self, raw: str) -> None:
        """Initialize with the offending version text."""
        self.raw = raw
        super().__init__(f"Malformed schema version '{raw}': expected MAJOR.MINOR.PATCH")


class IncompatibleVersionError(SchemaError):
    """Raised when a document's major version differs from the supported one."""

    def __init__(self, found: str, required_major: int) -> None:
        """Initialize with the document version and the supported major version."""
        self.found = found
        self.required_major = required_major
        super().__init__(
            f"Incompatible schema version: found {found}, "
            f"required major version {required_major}"
        )


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic ValidationError into clean, user-friendly message.

    Removes Pydantic-specific URLs and technical jargon, producing a message
    that names the path of each offending field.

    Args:
        error: The Pydantic ValidationError to format.

    Returns:
        A clean, human-readable error message.
    """
    messages = []

    for err in error.errors():
        # Field path, e.g. "modules.0.known_issues.1.severity"
        loc = ".".join(str(part) for part in err["loc"])
        error_type = err["type"]
        msg = err["msg"]

        if error_type == "json_invalid":
            messages.append(f"invalid JSON: {err.get('ctx', {}).get('error', msg)}")
        elif error_type == "missing":
            messages.append(f"'{loc}': field is required")
        elif error_type == "string_type":
            messages.append(f"'{loc}': expected string")
        elif error_type == "list_type":
            messages.append(f"'{loc}': expected list")
        elif error_type in ("int_type", "int_parsing"):
            messages.append(f"'{loc}': expected integer")
        elif error_type in ("float_type", "float_parsing"):
            messages.append(f"'{loc}': expected number")
        elif error_type == "bool_type":
            messages.append(f"'{loc}': expected boolean")
        elif error_type in ("model_type", "model_attributes_type", "dict_type"):
            messages.append(f"'{loc}': expected object")
        elif not loc:
            messages.append(msg.lower())
        else:
            messages.append(f"'{loc}': {msg.lower()}")

    if len(messages) == 1:
        return messages[0]

    return "; ".join(messages)


def handle_cli_error(error: Exception) -> int:
    """Handle an exception at the CLI boundary.

    Reports the error and returns the matching exit code. Version errors
    are reported differently from structural errors: an incompatible
    document calls for different tooling, a malformed one is corrupt.

    Args:
        error: The exception to handle.

    Returns:
        An exit code from exit_codes.
    """
    if isinstance(error, IncompatibleVersionError):
        cli_logger.error(escape(str(error)))
        cli_logger.dim(
            f"  Use a codemap release supporting schema {error.found.split('.')[0]}.x"
        )
        return exit_codes.VERSION_INCOMPATIBLE

    if isinstance(error, MalformedVersionError):
        cli_logger.error(f"Invalid document: {escape(str(error))}")
        return exit_codes.VERSION_MALFORMED

    if isinstance(error, ParseError):
        cli_logger.error(f"Invalid document: {escape(str(error))}")
        return exit_codes.DOCUMENT_INVALID

    if isinstance(error, ValidationError):
        cli_logger.error(f"Invalid document: {escape(format_validation_errors(error))}")
        return exit_codes.DOCUMENT_INVALID

    if isinstance(error, FileNotFoundError):
        cli_logger.error(f"Document not found: {escape(str(error.filename))}")
        return exit_codes.DOCUMENT_NOT_FOUND

    if isinstance(error, OSError):
        if error.filename:
            cli_logger.error(f"{error.strerror}: {escape(str(error.filename))}")
        else:
            cli_logger.error(escape(str(error)))
        return exit_codes.GENERAL_ERROR

    cli_logger.error(f"Unexpected error: {escape(str(error))}")
    return exit_codes.GENERAL_ERROR
