"""
64-second date/version encoding.

A UTC instant is stored in two 16-bit version components. The seconds
elapsed since the start of the instant's year are divided by 64 (the grain)
giving a 19-bit "shifted" value. Its low 16 bits become the revision and its
upper 3 bits are folded into the minor component together with the year::

    minor    = year * 10 + (shifted >> 16)
    revision = shifted & 0xFFFF

Decoding reverses this and yields the start of the 64-second bucket the
original instant fell in, so a decoded instant is never more than 63 seconds
earlier than the encoded one.
"""

from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, timezone
from typing import Union

from loguru import logger

from .exceptions import (
    HighPartOutOfRange,
    InstantBeyondYear,
    MinorOverflow,
    RevisionOverflow,
    YearOutOfRange,
)
from .models import ClockKind, DecodedInstant3, DecodedInstant4, VersionTuple3, VersionTuple4


class TimeVersionCodec:
    """Pure encoder/decoder between UTC instants and 64-second version tuples."""

    GRAIN_BITS = 6
    GRAIN_SECONDS = 1 << GRAIN_BITS
    LOW_BITS = 16
    LOW_MASK = 0xFFFF
    MAX_HIGH_PART = 7
    MAX_COMPONENT = 0xFFFF
    SECONDS_PER_DAY = 86400

    @staticmethod
    def _to_utc(instant: datetime, clock: Union[ClockKind, str]) -> datetime:
        """Normalize *instant* to an aware UTC datetime."""
        clock = ClockKind(clock.lower() if isinstance(clock, str) else clock)
        try:
            if instant.tzinfo is None or instant.utcoffset() is None:
                if clock is ClockKind.UTC:
                    return instant.replace(tzinfo=timezone.utc)
                # naive datetimes are taken as local wall-clock time
                return instant.astimezone(timezone.utc)
            return instant.astimezone(timezone.utc)
        except OverflowError as e:
            year = MINYEAR - 1 if instant.year == MINYEAR else MAXYEAR + 1
            raise YearOutOfRange(year) from e

    @classmethod
    def seconds_in_year(cls, year: int) -> int:
        days = 366 if calendar.isleap(year) else 365
        return days * cls.SECONDS_PER_DAY

    @classmethod
    def max_shifted(cls, year: int) -> int:
        """Largest shifted value whose bucket lies within *year*."""
        return (cls.seconds_in_year(year) - 1) >> cls.GRAIN_BITS

    @staticmethod
    def _split_minor(minor: int) -> tuple[int, int]:
        # truncating division, then pull the remainder back into 0..9
        quotient = abs(minor) // 10
        year = quotient if minor >= 0 else -quotient
        high = minor - year * 10
        if high < 0:
            year -= 1
            high += 10
        elif high > 9:
            year += 1
            high -= 10
        return year, high

    @classmethod
    def encode4(
        cls,
        build: int,
        major: int,
        instant: datetime,
        clock: Union[ClockKind, str] = ClockKind.UTC,
    ) -> VersionTuple4:
        """
        Encode *instant* into a four-part version.

        Args:
            build: Passed through unchanged.
            major: Passed through unchanged.
            instant: Moment to encode. Aware datetimes are converted to UTC;
                naive ones are interpreted according to *clock*.
            clock: Whether a naive *instant* is UTC or local time.

        Returns:
            VersionTuple4 whose minor and revision carry the instant.

        Raises:
            YearOutOfRange: If the UTC year is not in 1..9999.
            HighPartOutOfRange: If the shifted seconds need more than 19 bits.
            MinorOverflow: If ``year * 10 + high`` exceeds 65535.
        """
        utc = cls._to_utc(instant, clock)
        year = utc.year
        if not MINYEAR <= year <= MAXYEAR:
            raise YearOutOfRange(year)

        start_of_year = datetime(year, 1, 1, tzinfo=timezone.utc)
        delta = utc - start_of_year
        elapsed = delta.days * cls.SECONDS_PER_DAY + delta.seconds

        shifted = elapsed >> cls.GRAIN_BITS
        low = shifted & cls.LOW_MASK
        high = shifted >> cls.LOW_BITS
        if not 0 <= high <= cls.MAX_HIGH_PART:
            raise HighPartOutOfRange(high)

        minor = year * 10 + high
        if minor > cls.MAX_COMPONENT:
            raise MinorOverflow(minor, year=year)

        result = VersionTuple4(build=build, major=major, minor=minor, revision=low)
        logger.debug(f"Encoded {utc.isoformat()} as {result.text} (shifted={shifted})")
        return result

    @classmethod
    def decode4(cls, build: int, major: int, minor: int, revision: int) -> DecodedInstant4:
        """
        Decode a four-part version back into the start of its 64-second bucket.

        Raises:
            YearOutOfRange: If the year derived from *minor* is not in 1..9999.
            HighPartOutOfRange: If *minor* does not end in a digit 0..7.
            RevisionOverflow: If *revision* does not fit in 16 bits.
            InstantBeyondYear: If the shifted value lies past the end of the year.
        """
        year, high = cls._split_minor(minor)
        if not MINYEAR <= year <= MAXYEAR:
            raise YearOutOfRange(year)
        if not 0 <= high <= cls.MAX_HIGH_PART:
            raise HighPartOutOfRange(high, minor=minor)

        low = revision & cls.LOW_MASK
        if revision != low:
            raise RevisionOverflow(revision)

        shifted = (high << cls.LOW_BITS) | low
        max_shifted = cls.max_shifted(year)
        if shifted > max_shifted:
            raise InstantBeyondYear(shifted, year=year, max_shifted=max_shifted)

        computed = datetime(year, 1, 1, tzinfo=timezone.utc) + timedelta(
            seconds=shifted * cls.GRAIN_SECONDS
        )
        logger.debug(f"Decoded {build}.{major}.{minor}.{revision} as {computed.isoformat()}")
        return DecodedInstant4(build=build, major=major, computed=computed)

    @classmethod
    def encode3(
        cls,
        build: int,
        instant: datetime,
        clock: Union[ClockKind, str] = ClockKind.UTC,
    ) -> VersionTuple3:
        """Encode *instant* into the collapsed ``Build.Major.Minor`` form."""
        return cls.encode4(build, 0, instant, clock).to_tuple3()

    @classmethod
    def decode3(cls, build: int, major: int, minor: int) -> DecodedInstant3:
        """Decode a three-part version; its major/minor are the four-part minor/revision."""
        try:
            decoded = cls.decode4(build, 0, major, minor)
        except RevisionOverflow as e:
            raise RevisionOverflow(e.value, field="minor") from e
        return DecodedInstant3(build=decoded.build, computed=decoded.computed)


encode4 = TimeVersionCodec.encode4
decode4 = TimeVersionCodec.decode4
encode3 = TimeVersionCodec.encode3
decode3 = TimeVersionCodec.decode3
