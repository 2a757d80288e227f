"""Value types for the 64-second date/version encoding."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class ClockKind(str, Enum):
    """How a naive datetime handed to the encoder should be interpreted."""

    UTC = "utc"
    LOCAL = "local"


@dataclass(frozen=True, slots=True)
class VersionTuple4:
    """A four-part ``Build.Major.Minor.Revision`` version carrying an encoded instant."""

    build: int
    major: int
    minor: int      # year * 10 + high part
    revision: int   # low 16 bits of the shifted seconds

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        """Dotted-decimal display form."""
        return f"{self.build}.{self.major}.{self.minor}.{self.revision}"

    @property
    def year(self) -> int:
        return self.minor // 10

    @property
    def high_part(self) -> int:
        return self.minor % 10

    def to_tuple3(self) -> VersionTuple3:
        """Collapse to the three-part form, dropping ``major``."""
        return VersionTuple3(build=self.build, major=self.minor, minor=self.revision)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "build": self.build,
            "major": self.major,
            "minor": self.minor,
            "revision": self.revision,
            "version": self.text,
        }


@dataclass(frozen=True, slots=True)
class VersionTuple3:
    """
    A three-part ``Build.Major.Minor`` version.

    ``major`` holds what the four-part form keeps in ``minor`` and ``minor``
    holds its ``revision``. The four-part ``major`` is always taken as 0.
    """

    build: int
    major: int
    minor: int

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        return f"{self.build}.{self.major}.{self.minor}"

    def to_tuple4(self) -> VersionTuple4:
        return VersionTuple4(build=self.build, major=0, minor=self.major, revision=self.minor)

    def to_dict(self) -> dict[str, Any]:
        return {
            "build": self.build,
            "major": self.major,
            "minor": self.minor,
            "version": self.text,
        }


@dataclass(frozen=True, slots=True)
class DecodedInstant4:
    """Result of decoding a four-part version."""

    build: int
    major: int
    computed: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "build": self.build,
            "major": self.major,
            "computed": self.computed.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class DecodedInstant3:
    """Result of decoding a three-part version."""

    build: int
    computed: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "build": self.build,
            "computed": self.computed.isoformat(),
        }
