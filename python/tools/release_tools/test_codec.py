from datetime import datetime, timedelta, timezone

import pytest

from .codec import TimeVersionCodec, decode3, decode4, encode3, encode4
from .exceptions import (
    HighPartOutOfRange,
    InstantBeyondYear,
    MinorOverflow,
    RangeError,
    RevisionOverflow,
    YearOutOfRange,
)
from .models import ClockKind, VersionTuple3, VersionTuple4

UTC = timezone.utc


# --- Encoding ---


def test_encode4_concrete_example():
    """64 seconds into 2025 lands in the second bucket of the year."""
    version = encode4(1, 0, datetime(2025, 1, 1, 0, 1, 4, tzinfo=UTC))
    assert version == VersionTuple4(build=1, major=0, minor=20250, revision=1)
    assert version.text == "1.0.20250.1"
    assert str(version) == "1.0.20250.1"


def test_encode4_passes_build_and_major_through():
    version = encode4(987654, 42, datetime(2025, 6, 1, tzinfo=UTC))
    assert version.build == 987654
    assert version.major == 42


@pytest.mark.parametrize(
    "instant, minor, revision",
    [
        (datetime(2025, 1, 1, tzinfo=UTC), 20250, 0),
        (datetime(2025, 1, 1, 0, 1, 3, tzinfo=UTC), 20250, 0),
        (datetime(2025, 1, 1, 0, 1, 4, 999999, tzinfo=UTC), 20250, 1),
        # 65536 buckets after the start of the year the high part becomes 1
        (datetime(2025, 2, 18, 13, 5, 3, tzinfo=UTC), 20250, 65535),
        (datetime(2025, 2, 18, 13, 5, 4, tzinfo=UTC), 20251, 0),
        (datetime(2024, 12, 31, 23, 59, 59, tzinfo=UTC), 20247, 35347),
        (datetime(1, 1, 1, tzinfo=UTC), 10, 0),
    ],
)
def test_encode4_known_values(instant, minor, revision):
    version = encode4(1, 0, instant)
    assert (version.minor, version.revision) == (minor, revision)


def test_encode4_converts_aware_datetimes_to_utc():
    plus_one = timezone(timedelta(hours=1))
    local = datetime(2025, 1, 1, 1, 1, 4, tzinfo=plus_one)
    assert encode4(1, 0, local).text == "1.0.20250.1"


def test_encode4_offset_can_move_instant_into_previous_year():
    plus_two = timezone(timedelta(hours=2))
    version = encode4(1, 0, datetime(2025, 1, 1, 1, 0, tzinfo=plus_two))
    assert version.year == 2024


def test_encode4_naive_datetime_is_utc_by_default():
    naive = datetime(2025, 1, 1, 0, 1, 4)
    assert encode4(1, 0, naive) == encode4(1, 0, naive.replace(tzinfo=UTC))


def test_encode4_naive_datetime_with_local_clock():
    naive = datetime(2025, 7, 1, 12, 0, 0)
    expected = encode4(1, 0, naive.astimezone(UTC))
    assert encode4(1, 0, naive, ClockKind.LOCAL) == expected
    assert encode4(1, 0, naive, "local") == expected


def test_encode4_local_clock_ignored_for_aware_datetimes():
    aware = datetime(2025, 7, 1, 12, 0, 0, tzinfo=UTC)
    assert encode4(1, 0, aware, ClockKind.LOCAL) == encode4(1, 0, aware)


def test_encode4_year_9999_overflows_minor():
    with pytest.raises(MinorOverflow) as excinfo:
        encode4(1, 0, datetime(9999, 12, 31, 23, 59, 0, tzinfo=UTC))

    assert excinfo.value.error_code == "MINOR_OVERFLOW"
    assert excinfo.value.field == "minor"
    assert excinfo.value.value > 65535
    assert excinfo.value.context["year"] == 9999


def test_encode4_encodable_ceiling_is_early_6553():
    assert encode4(1, 0, datetime(6553, 1, 1, tzinfo=UTC)).minor == 65530
    with pytest.raises(MinorOverflow):
        encode4(1, 0, datetime(6553, 12, 31, tzinfo=UTC))


@pytest.mark.parametrize(
    "instant, year",
    [
        (datetime(1, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=1))), 0),
        (datetime(9999, 12, 31, 23, 30, tzinfo=timezone(timedelta(hours=-1))), 10000),
    ],
)
def test_encode4_year_leaving_datetime_range(instant, year):
    with pytest.raises(YearOutOfRange) as excinfo:
        encode4(1, 0, instant)
    assert excinfo.value.value == year
    assert excinfo.value.error_code == "YEAR_OUT_OF_RANGE"


def test_encode4_clock_name_is_case_insensitive():
    naive = datetime(2025, 1, 1, 0, 1, 4)
    assert encode4(1, 0, naive, "UTC") == encode4(1, 0, naive, ClockKind.UTC)
    assert encode4(1, 0, naive, "Local") == encode4(1, 0, naive, ClockKind.LOCAL)


def test_encode4_rejects_unknown_clock():
    with pytest.raises(ValueError):
        encode4(1, 0, datetime(2025, 1, 1), "martian")


# --- Decoding ---


def test_decode4_concrete_example():
    decoded = decode4(1, 0, 20250, 1)
    assert decoded.build == 1
    assert decoded.major == 0
    assert decoded.computed == datetime(2025, 1, 1, 0, 1, 4, tzinfo=UTC)
    assert decoded.computed.tzinfo is UTC


def test_decode4_earliest_year():
    assert decode4(1, 0, 10, 0).computed == datetime(1, 1, 1, tzinfo=UTC)


def test_decode4_leap_year_end_is_accepted():
    decoded = decode4(1, 0, 20247, 35347)
    assert decoded.computed == datetime(2024, 12, 31, 23, 58, 56, tzinfo=UTC)


def test_decode4_last_bucket_of_common_year():
    max_shifted = TimeVersionCodec.max_shifted(2023)
    assert max_shifted == 492749
    low = max_shifted & 0xFFFF
    decoded = decode4(1, 0, 20237, low)
    assert decoded.computed == datetime(2023, 12, 31, 23, 58, 56, tzinfo=UTC)

    with pytest.raises(InstantBeyondYear) as excinfo:
        decode4(1, 0, 20237, low + 1)
    assert excinfo.value.value == max_shifted + 1
    assert excinfo.value.context["max_shifted"] == max_shifted


def test_decode4_shift_valid_only_in_leap_year():
    """A day-366 offset decodes for 2024 but not for 2023."""
    low = 494000 - (7 << 16)
    assert decode4(1, 0, 20247, low).computed.year == 2024
    with pytest.raises(InstantBeyondYear):
        decode4(1, 0, 20237, low)


def test_decode4_all_ones_is_beyond_any_year():
    with pytest.raises(InstantBeyondYear) as excinfo:
        decode4(1, 0, 20257, 65535)
    assert excinfo.value.error_code == "INSTANT_BEYOND_YEAR"
    assert excinfo.value.field == "shifted"


def test_decode4_revision_overflow():
    with pytest.raises(RevisionOverflow) as excinfo:
        decode4(1, 0, 25, 70000)
    assert excinfo.value.field == "revision"
    assert excinfo.value.value == 70000


def test_decode4_negative_revision_overflows():
    with pytest.raises(RevisionOverflow):
        decode4(1, 0, 20250, -1)


@pytest.mark.parametrize("minor", [20258, 20259, 65538])
def test_decode4_high_part_out_of_range(minor):
    with pytest.raises(HighPartOutOfRange) as excinfo:
        decode4(1, 0, minor, 0)
    assert excinfo.value.value == minor % 10
    assert "not an encoded 64-second version" in str(excinfo.value)


@pytest.mark.parametrize("minor, year", [(0, 0), (7, 0), (100000, 10000), (-5, -1)])
def test_decode4_year_out_of_range(minor, year):
    with pytest.raises(YearOutOfRange) as excinfo:
        decode4(1, 0, minor, 0)
    assert excinfo.value.value == year


def test_range_errors_share_a_base():
    for error_type in (
        YearOutOfRange,
        HighPartOutOfRange,
        MinorOverflow,
        RevisionOverflow,
        InstantBeyondYear,
    ):
        assert issubclass(error_type, RangeError)
        assert issubclass(error_type, ValueError)


def test_range_error_to_dict():
    with pytest.raises(RevisionOverflow) as excinfo:
        decode4(1, 0, 20250, 65536)
    data = excinfo.value.to_dict()
    assert data["exception_type"] == "RevisionOverflow"
    assert data["error_code"] == "REVISION_OVERFLOW"
    assert data["context"] == {"field": "revision", "value": 65536}


# --- Round trips ---

ROUND_TRIP_INSTANTS = [
    datetime(1, 1, 1, 0, 0, 1, tzinfo=UTC),
    datetime(1999, 12, 31, 12, 0, 0, tzinfo=UTC),
    datetime(2000, 2, 29, 23, 59, 59, 500000, tzinfo=UTC),
    datetime(2023, 12, 31, 23, 58, 0, tzinfo=UTC),
    datetime(2024, 7, 4, 8, 15, 33, tzinfo=UTC),
    datetime(2025, 2, 18, 13, 5, 4, tzinfo=UTC),
    datetime(2025, 10, 18, 17, 42, 9, 123456, tzinfo=UTC),
    datetime(6552, 12, 31, 23, 0, 0, tzinfo=UTC),
]


@pytest.mark.parametrize("instant", ROUND_TRIP_INSTANTS)
def test_round_trip_within_grain(instant):
    version = encode4(7, 3, instant)
    decoded = decode4(version.build, version.major, version.minor, version.revision)

    assert decoded.build == 7
    assert decoded.major == 3
    assert decoded.computed <= instant
    assert instant - decoded.computed <= timedelta(seconds=63, microseconds=999999)

    start_of_year = datetime(instant.year, 1, 1, tzinfo=UTC)
    offset = decoded.computed - start_of_year
    assert offset.microseconds == 0
    assert (offset.days * 86400 + offset.seconds) % 64 == 0


@pytest.mark.parametrize("instant", ROUND_TRIP_INSTANTS)
def test_decode_then_encode_is_identity(instant):
    version = encode4(7, 3, instant)
    decoded = decode4(version.build, version.major, version.minor, version.revision)
    assert encode4(decoded.build, decoded.major, decoded.computed) == version


# --- Three-part form ---


@pytest.mark.parametrize("instant", ROUND_TRIP_INSTANTS)
def test_encode3_matches_encode4(instant):
    four = encode4(5, 0, instant)
    three = encode3(5, instant)
    assert three == VersionTuple3(build=5, major=four.minor, minor=four.revision)
    assert three.text == f"5.{four.minor}.{four.revision}"


@pytest.mark.parametrize("instant", ROUND_TRIP_INSTANTS)
def test_decode3_matches_decode4(instant):
    three = encode3(5, instant)
    decoded3 = decode3(three.build, three.major, three.minor)
    decoded4 = decode4(three.build, 0, three.major, three.minor)
    assert decoded3.build == 5
    assert decoded3.computed == decoded4.computed


def test_encode3_drops_nothing_but_major():
    instant = datetime(2025, 1, 1, 0, 1, 4, tzinfo=UTC)
    assert encode3(1, instant).text == "1.20250.1"
    assert encode4(1, 9, instant).to_tuple3() == encode3(1, instant)


def test_decode3_reports_minor_on_overflow():
    with pytest.raises(RevisionOverflow) as excinfo:
        decode3(1, 20250, 70000)
    assert excinfo.value.field == "minor"
    assert excinfo.value.value == 70000


def test_seconds_in_year():
    assert TimeVersionCodec.seconds_in_year(2024) == 31622400
    assert TimeVersionCodec.seconds_in_year(2023) == 31536000
    assert TimeVersionCodec.seconds_in_year(1900) == 31536000
    assert TimeVersionCodec.seconds_in_year(2000) == 31622400
