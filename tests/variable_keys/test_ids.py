"""Tests for ULID/UUID string identifier helpers."""

from __future__ import annotations

import itertools
from concurrent.futures import ThreadPoolExecutor

import pytest

from packages.variable_keys.ids import (
    MonotonicUlidGenerator,
    decode_ulid,
    encode_ulid,
    generate_ulid_str,
    generate_uuid_str,
    is_ulid,
    is_uuid,
    ulid_timestamp_ms,
)


def test_generated_ulid_is_lowercase_26_chars() -> None:
    """Generated ULIDs use the lowercase canonical string form."""
    value = generate_ulid_str()

    assert len(value) == 26
    assert value == value.lower()
    assert is_ulid(value)


def test_ulid_encodes_requested_timestamp() -> None:
    """The leading 48 bits carry the millisecond timestamp."""
    value = generate_ulid_str(timestamp_ms=1_700_000_000_000)

    assert ulid_timestamp_ms(value) == 1_700_000_000_000


def test_successive_ulids_are_strictly_increasing() -> None:
    """Back-to-back ULIDs sort in generation order, even within a millisecond."""
    values = [generate_ulid_str() for _ in range(1000)]

    assert all(earlier < later for earlier, later in itertools.pairwise(values))


def test_generator_increments_entropy_when_clock_repeats() -> None:
    """A repeated millisecond bumps the previous value by exactly one."""
    generator = MonotonicUlidGenerator(clock=lambda: 1_700_000_000_000)

    first = generator.next_int()
    second = generator.next_int()

    assert second == first + 1
    assert ulid_timestamp_ms(encode_ulid(second)) == 1_700_000_000_000


def test_generator_holds_timestamp_when_clock_steps_back() -> None:
    """A clock moving backwards never produces a smaller ULID."""
    ticks = iter([1_700_000_000_005, 1_700_000_000_001, 1_700_000_000_009])
    generator = MonotonicUlidGenerator(clock=lambda: next(ticks))

    first, second, third = (generator.next_str() for _ in range(3))

    assert first < second < third
    assert ulid_timestamp_ms(second) == 1_700_000_000_005
    assert ulid_timestamp_ms(third) == 1_700_000_000_009


def test_generator_stays_ordered_across_threads() -> None:
    """Concurrent callers never receive duplicate values."""
    generator = MonotonicUlidGenerator(clock=lambda: 1_700_000_000_000)

    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(lambda _: generator.next_int(), range(2000)))

    assert len(set(values)) == 2000
    assert max(values) - min(values) == 1999


def test_ulid_decoding_accepts_either_case() -> None:
    """Decoding is case-insensitive so stored lowercase keys stay usable."""
    value = generate_ulid_str()

    assert decode_ulid(value.upper()) == decode_ulid(value)
    assert encode_ulid(decode_ulid(value)) == value


def test_ulid_string_order_matches_integer_order() -> None:
    """Sorting lowercase strings must match sorting the 128-bit values."""
    values = [
        decode_ulid(generate_ulid_str(timestamp_ms=1_700_000_000_000))
        for _ in range(300)
    ]

    assert sorted(values) == sorted(values, key=encode_ulid)


def test_ulid_rejects_out_of_range_timestamp() -> None:
    """Timestamps must fit in 48 bits."""
    with pytest.raises(ValueError, match="48-bit"):
        generate_ulid_str(timestamp_ms=1 << 48)


def test_decode_rejects_malformed_ulid() -> None:
    """Decoding validates the string before parsing it."""
    with pytest.raises(ValueError, match="Not a ULID"):
        decode_ulid("01ARZ3NDEKTSV4RRFFQ69G5FAU")


@pytest.mark.parametrize(
    "value",
    ["", "01arz3ndektsv4rrffq69g5fa", "81ARZ3NDEKTSV4RRFFQ69G5FAV", "01ARZ3NDEKTSV4RRFFQ69G5FAU", 42],
)
def test_is_ulid_rejects_malformed_values(value: object) -> None:
    """Short, overflowing, non-Crockford and non-string values are rejected."""
    assert not is_ulid(value)


def test_generated_uuid_is_lowercase_v4() -> None:
    """Generated UUIDs are lowercase 36-char version-4 strings."""
    value = generate_uuid_str()

    assert len(value) == 36
    assert value == value.lower()
    assert value[14] == "4"
    assert is_uuid(value)
    assert not is_uuid(value.replace("-", ""))
