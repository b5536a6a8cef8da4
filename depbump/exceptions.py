"""
Custom exception hierarchy for depbump.

This module defines structured exception types used across depbump.
All exceptions inherit from :class:`DepBumpError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

The upgrade pipeline itself never raises for malformed version specs or
missing versions; these exceptions cover I/O, configuration, and caller
contract violations at the boundary.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class DepBumpError(Exception):
    """Base exception for all depbump errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ParseError(DepBumpError):
    """Raised when a manifest cannot be parsed.

    Args:
        message: Error description.
        file_path: Path to the file being parsed.
        line_number: Line number reported by the JSON decoder.
    """

    __slots__ = ("file_path", "line_number")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", file_path)
        _add_if(details, "line", line_number)

        super().__init__(message, details)

        self.file_path = file_path
        self.line_number = line_number


class ConfigError(DepBumpError):
    """Raised when a configuration file is missing, unreadable, or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class OptionsError(DepBumpError):
    """Raised when malformed upgrade options are passed by a caller.

    Args:
        message: Error description.
        option: Name of the offending option.
        value: The rejected value.
    """

    __slots__ = ("option", "value")

    def __init__(
        self,
        message: str,
        *,
        option: Optional[str] = None,
        value: Any = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "option", option)
        _add_if(details, "value", repr(value) if value is not None else None)

        super().__init__(message, details)

        self.option = option
        self.value = value


class NetworkError(DepBumpError):
    """Raised when HTTP or network operations fail.

    Args:
        message: Error description.
        url: URL being accessed.
        status_code: HTTP status code, if available.
        response_body: Raw response body, truncated for safety.
    """

    __slots__ = ("url", "status_code", "response_body")

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "url", url)
        _add_if(details, "status_code", status_code)

        if response_body is not None:
            details["response"] = _truncate(response_body)

        super().__init__(message, details)

        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class RegistryError(DepBumpError):
    """Raised when a static registry cannot be loaded.

    This is a fatal configuration error: the run cannot proceed without
    a source of latest versions.

    Args:
        message: Error description.
        source: Registry path or URL.
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("source", "original_error")

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "source", source)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.source = source
        self.original_error = original_error


class FileOperationError(DepBumpError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/delete).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
