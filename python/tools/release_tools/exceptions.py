#!/usr/bin/env python3
"""
Exception types for the release tools.

Every failure raised by the package derives from ``ReleaseToolsError`` and
carries an error code plus structured context for logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional


class ReleaseToolsError(Exception):
    """Base exception for release tooling operations with structured context."""

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        original_error: Optional[Exception] = None,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code or self.__class__.__name__.upper()
        self.original_error = original_error
        self.context = context

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.original_error:
            parts.append(f"Cause: {self.original_error}")
        return " | ".join(parts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={str(self)!r}, error_code={self.error_code!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "message": str(self.args[0]) if self.args else "",
            "error_code": self.error_code,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
            "exception_type": self.__class__.__name__,
        }


class RangeError(ReleaseToolsError, ValueError):
    """
    Raised when a value falls outside the range the 64-second version
    encoding can represent.

    ``field`` names the offending input or derived quantity and ``value``
    holds what was found there.
    """

    def __init__(
        self, message: str, *, field: str, value: int, error_code: str, **context: Any
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message, error_code=error_code, field=field, value=value, **context)


class YearOutOfRange(RangeError):
    """Raised when a source or decoded year is not in 1..9999."""

    def __init__(self, year: int, *, field: str = "year") -> None:
        super().__init__(
            f"Year {year} is out of the encodable range 1..9999",
            field=field,
            value=year,
            error_code="YEAR_OUT_OF_RANGE",
        )


class HighPartOutOfRange(RangeError):
    """Raised when the 3-bit high part of the shifted seconds is not in 0..7."""

    def __init__(self, high_part: int, *, minor: Optional[int] = None) -> None:
        if minor is None:
            message = f"High part {high_part} does not fit in 3 bits"
        else:
            message = f"Minor {minor} is not an encoded 64-second version (high part {high_part})"
        super().__init__(
            message,
            field="high_part",
            value=high_part,
            error_code="HIGH_PART_OUT_OF_RANGE",
            minor=minor,
        )


class MinorOverflow(RangeError):
    """Raised when an encoded minor component exceeds 65535."""

    def __init__(self, minor: int, *, year: int) -> None:
        super().__init__(
            f"Encoded minor {minor} for year {year} exceeds 65535",
            field="minor",
            value=minor,
            error_code="MINOR_OVERFLOW",
            year=year,
        )


class RevisionOverflow(RangeError):
    """Raised when a revision component does not fit in 16 bits."""

    def __init__(self, revision: int, *, field: str = "revision") -> None:
        super().__init__(
            f"{field.capitalize()} {revision} does not fit in 16 bits",
            field=field,
            value=revision,
            error_code="REVISION_OVERFLOW",
        )


class InstantBeyondYear(RangeError):
    """Raised when decoded shifted seconds point past December 31 of the year."""

    def __init__(self, shifted: int, *, year: int, max_shifted: int) -> None:
        super().__init__(
            f"Shifted value {shifted} describes a moment beyond the end of {year} "
            f"(maximum {max_shifted})",
            field="shifted",
            value=shifted,
            error_code="INSTANT_BEYOND_YEAR",
            year=year,
            max_shifted=max_shifted,
        )


class VersionFormatError(ReleaseToolsError):
    """Raised when dotted version text cannot be parsed."""

    def __init__(self, message: str, *, text: str) -> None:
        self.text = text
        super().__init__(message, error_code="VERSION_FORMAT_ERROR", text=text)


class TemplateError(ReleaseToolsError):
    """Raised when a template cannot be read, expanded or written."""

    def __init__(
        self,
        message: str,
        *,
        template_path: Optional[Path] = None,
        missing: Optional[List[str]] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.template_path = template_path
        self.missing = missing or []
        super().__init__(
            message,
            error_code="TEMPLATE_ERROR",
            original_error=original_error,
            template_path=str(template_path) if template_path else None,
            missing=self.missing,
        )


class ConfigurationError(ReleaseToolsError):
    """Raised when a configuration file is missing, unreadable or invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_file: Optional[Path] = None,
        invalid_option: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.config_file = config_file
        self.invalid_option = invalid_option
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            original_error=original_error,
            config_file=str(config_file) if config_file else None,
            invalid_option=invalid_option,
        )


__all__ = [
    "ReleaseToolsError",
    "RangeError",
    "YearOutOfRange",
    "HighPartOutOfRange",
    "MinorOverflow",
    "RevisionOverflow",
    "InstantBeyondYear",
    "VersionFormatError",
    "TemplateError",
    "ConfigurationError",
]
