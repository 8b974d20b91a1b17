"""Exception hierarchy for annorest.

All exceptions inherit from :class:`AnnorestError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`annorest.exit_codes`.
The top-level error handler in :func:`annorest.app.main` catches
``AnnorestError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    AnnorestError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SourceParseError    (exit 7)
    +-- GenerationError     (exit 8)
    +-- WriteError          (exit 9)
    +-- ConfigError         (exit 1)
"""

from annorest.exit_codes import (
    EXIT_GENERATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SOURCE_PARSE_ERROR,
    EXIT_WRITE_ERROR,
)


class AnnorestError(Exception):
    """Base exception for all annorest errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`annorest.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(AnnorestError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class SourceParseError(AnnorestError):
    """Raised when the input source cannot be read or is not valid Python."""

    exit_code = EXIT_SOURCE_PARSE_ERROR


class GenerationError(AnnorestError):
    """Raised when a request spec cannot be lowered to well-formed source."""

    exit_code = EXIT_GENERATION_ERROR


class WriteError(AnnorestError):
    """Raised when generated source cannot be written to disk."""

    exit_code = EXIT_WRITE_ERROR


class ConfigError(AnnorestError):
    """Raised for configuration problems (invalid project config JSON)."""

    exit_code = EXIT_GENERIC_FAILURE
