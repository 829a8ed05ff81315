"""nppmodel exception hierarchy.

Exceptions are reserved for programming and configuration errors.
Missing or inconsistent model inputs are reported as
:class:`~nppmodel._types.Diagnostic` values, never raised.

All exceptions follow a three-part message pattern: what failed,
likely cause, and suggested fix.
"""

from __future__ import annotations


class NPPModelError(Exception):
    """Base exception for all nppmodel errors.

    Args:
        what: Description of what failed.
        cause: Likely cause of the failure.
        fix: Suggested action to resolve the issue.

    Example:
        >>> raise NPPModelError(
        ...     what="Operation failed",
        ...     cause="Unexpected internal state",
        ...     fix="Please report this issue",
        ... )
    """

    def __init__(
        self,
        what: str,
        cause: str = "",
        fix: str = "",
    ) -> None:
        self.what = what
        self.cause = cause
        self.fix = fix
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Build the multi-line error message from parts.

        Returns:
            Formatted message with optional Cause and Fix lines.
        """
        parts = [self.what]
        if self.cause:
            parts.append(f"Cause: {self.cause}")
        if self.fix:
            parts.append(f"Fix: {self.fix}")
        return "\n".join(parts)


class ConfigurationError(NPPModelError):
    """Raised when a configuration file cannot be read or parsed.

    Example:
        >>> raise ConfigurationError(
        ...     what="Cannot read config file",
        ...     cause="File not found: ~/.nppmodel/config.json",
        ...     fix="Create the file or set NPPMODEL_CONFIG",
        ... )
    """
