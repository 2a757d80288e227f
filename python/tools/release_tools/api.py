"""API functions for CLI usage and for build scripts consuming version numbers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional, Union

from loguru import logger

from .codec import TimeVersionCodec
from .exceptions import VersionFormatError
from .models import ClockKind, DecodedInstant3, DecodedInstant4, VersionTuple3, VersionTuple4

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: the current aware UTC time."""
    return datetime.now(timezone.utc)


def encode_datetime(
    build: int,
    major: int = 0,
    when: Optional[datetime] = None,
    clock: Union[ClockKind, str] = ClockKind.UTC,
    now: Clock = utc_now,
) -> VersionTuple4:
    """
    Encode a moment as a ``Build.Major.Minor.Revision`` version.

    Args:
        build: Build component, passed through.
        major: Major component, passed through.
        when: Moment to encode; read from *now* when omitted.
        clock: Interpretation of a naive *when*.
        now: Zero-argument callable supplying the current time.

    Returns:
        The encoded VersionTuple4.
    """
    instant = when if when is not None else now()
    return TimeVersionCodec.encode4(build, major, instant, clock)


def encode_datetime3(
    build: int,
    when: Optional[datetime] = None,
    clock: Union[ClockKind, str] = ClockKind.UTC,
    now: Clock = utc_now,
) -> VersionTuple3:
    """Encode a moment as a ``Build.Major.Minor`` version."""
    instant = when if when is not None else now()
    return TimeVersionCodec.encode3(build, instant, clock)


def decode_version(version: Union[VersionTuple4, VersionTuple3]) -> Union[DecodedInstant4, DecodedInstant3]:
    """Decode either tuple shape."""
    if isinstance(version, VersionTuple4):
        return TimeVersionCodec.decode4(
            version.build, version.major, version.minor, version.revision
        )
    return TimeVersionCodec.decode3(version.build, version.major, version.minor)


def parse_version(text: str) -> Union[VersionTuple4, VersionTuple3]:
    """
    Parse dotted-decimal version text.

    Four components give a VersionTuple4, three give a VersionTuple3.

    Raises:
        VersionFormatError: If the text has another number of components or a
            component is not a decimal integer.
    """
    stripped = text.strip()
    parts = stripped.split(".")
    if len(parts) not in (3, 4):
        raise VersionFormatError(
            f"Expected 3 or 4 dot-separated components, got {len(parts)}: {text!r}",
            text=text,
        )

    numbers = []
    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise VersionFormatError(
                f"Version component {part!r} is not a non-negative integer", text=text
            )
        numbers.append(int(part))

    if len(numbers) == 4:
        return VersionTuple4(*numbers)
    return VersionTuple3(*numbers)


def decode_version_text(text: str) -> Union[DecodedInstant4, DecodedInstant3]:
    """Parse and decode dotted version text in one step."""
    version = parse_version(text)
    logger.debug(f"Parsed {text!r} as {type(version).__name__}")
    return decode_version(version)
