"""Process exit codes and error description helpers.

Fatal failures (bad configuration, an unreachable or misbehaving recording
service while listing) end the run with ``ExitCode.FAILURE``. Failures while
deleting individual files are logged and do not change the exit code.
"""

from typing import Any, Dict


class ExitCode:
    """Process exit codes returned by the command line entry point."""

    OK = 0
    FAILURE = 1


class ConfigError(Exception):
    """Raised when configuration values cannot be loaded or validated."""

    pass


class DurationError(ConfigError, ValueError):
    """Raised when a retention duration expression is malformed."""

    pass


def describe_error(exc: BaseException) -> Dict[str, Any]:
    """Build structured log fields describing an exception.

    Args:
        exc: The exception to describe.

    Returns:
        Dictionary with ``error_type`` and ``error`` keys, plus
        ``status_code`` when the exception carries an HTTP status.
    """
    fields: Dict[str, Any] = {
        "error_type": type(exc).__name__,
        "error": str(exc),
    }

    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        fields["status_code"] = status_code

    return fields
