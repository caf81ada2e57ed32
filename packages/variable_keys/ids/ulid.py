"""Monotonic ULID generation for string primary keys.

A ULID is a 128-bit value: a 48-bit millisecond timestamp followed by 80 bits
of entropy, written as 26 Crockford Base32 characters. Keys are stored
lowercase; parsing accepts either case.

Within one millisecond the generator increments the previous entropy instead
of drawing new random bits, so keys generated in sequence sort in the order
they were generated.
"""

from __future__ import annotations

import re
import secrets
import threading
import time
from typing import Callable

ULID_LENGTH = 26

_CROCKFORD = "0123456789abcdefghjkmnpqrstvwxyz"
_CROCKFORD_VALUES = {char: index for index, char in enumerate(_CROCKFORD)}
_ENTROPY_BITS = 80
_ENTROPY_LIMIT = 1 << _ENTROPY_BITS
_TIMESTAMP_LIMIT = 1 << 48
_ULID_RE = re.compile(r"^[0-7][0-9a-hjkmnp-tv-z]{25}$", re.IGNORECASE)


def _now_ms() -> int:
    """Return wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class MonotonicUlidGenerator:
    """Thread-safe ULID source that stays ordered within a millisecond.

    ``clock`` returns the current time in milliseconds. When it repeats or
    steps backwards, the previous timestamp is kept and its entropy is
    incremented by one.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._last_timestamp = -1
        self._last_entropy = 0

    def next_int(self) -> int:
        """Return the next ULID as a 128-bit integer."""
        with self._lock:
            timestamp = self._clock()
            if timestamp <= self._last_timestamp:
                timestamp = self._last_timestamp
                entropy = self._last_entropy + 1
                if entropy >= _ENTROPY_LIMIT:
                    raise OverflowError("ULID entropy exhausted within one millisecond")
            else:
                entropy = secrets.randbits(_ENTROPY_BITS)
            value = _compose(timestamp, entropy)
            self._last_timestamp = timestamp
            self._last_entropy = entropy
        return value

    def next_str(self) -> str:
        """Return the next ULID as a lowercase string."""
        return encode_ulid(self.next_int())


_GENERATOR = MonotonicUlidGenerator()


def generate_ulid_str(*, timestamp_ms: int | None = None) -> str:
    """Return a new lowercase ULID string.

    Without ``timestamp_ms`` the value comes from the process-wide monotonic
    generator. A pinned timestamp draws fresh random entropy instead and is
    not ordered against other values for the same millisecond.
    """
    if timestamp_ms is None:
        return _GENERATOR.next_str()
    return encode_ulid(_compose(int(timestamp_ms), secrets.randbits(_ENTROPY_BITS)))


def encode_ulid(number: int) -> str:
    """Render a 128-bit integer as a lowercase 26-char ULID."""
    if not 0 <= number < 1 << 128:
        raise ValueError("ULID value must fit in 128 bits")
    return "".join(_CROCKFORD[(number >> shift) & 0x1F] for shift in range(125, -1, -5))


def decode_ulid(value: str) -> int:
    """Parse a ULID string of either case into its 128-bit integer."""
    if not is_ulid(value):
        raise ValueError(f"Not a ULID: {value!r}")
    number = 0
    for char in value.lower():
        number = (number << 5) | _CROCKFORD_VALUES[char]
    return number


def ulid_timestamp_ms(value: str) -> int:
    """Return the millisecond timestamp encoded in a ULID string."""
    return decode_ulid(value) >> _ENTROPY_BITS


def is_ulid(value: object) -> bool:
    """Return whether ``value`` is a well-formed ULID string."""
    return isinstance(value, str) and _ULID_RE.fullmatch(value) is not None


def _compose(timestamp_ms: int, entropy: int) -> int:
    """Pack a timestamp and entropy into one ULID integer."""
    if not 0 <= timestamp_ms < _TIMESTAMP_LIMIT:
        raise ValueError("timestamp_ms out of ULID 48-bit range")
    return (timestamp_ms << _ENTROPY_BITS) | entropy
