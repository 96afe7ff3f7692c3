#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""COFF TimeDateStamp conversion.

The raw values 0 and 0xFFFFFFFF are not dates: they map to the minimum and
maximum representable datetimes and back.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import math

from pehead.config.defaults import TIMESTAMP_MAX_RAW, TIMESTAMP_MIN_RAW
from pehead.exceptions import EncodeError

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
TIMESTAMP_UNKNOWN_MIN = datetime.min.replace(tzinfo=UTC)
TIMESTAMP_UNKNOWN_MAX = datetime.max.replace(tzinfo=UTC)


def decode_timestamp(raw: int) -> datetime:
    if raw == TIMESTAMP_MIN_RAW:
        return TIMESTAMP_UNKNOWN_MIN
    if raw == TIMESTAMP_MAX_RAW:
        return TIMESTAMP_UNKNOWN_MAX
    return EPOCH + timedelta(seconds=raw)


def encode_timestamp(value: datetime) -> int:
    """
    Convert a compile time back to its raw 32-bit value.

    Naive datetimes are taken as UTC. Fractional seconds are floored.

    Raises:
        EncodeError: If the value falls outside the 32-bit range
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    if value == TIMESTAMP_UNKNOWN_MIN:
        return TIMESTAMP_MIN_RAW
    if value == TIMESTAMP_UNKNOWN_MAX:
        return TIMESTAMP_MAX_RAW

    seconds = math.floor((value - EPOCH).total_seconds())
    if not TIMESTAMP_MIN_RAW <= seconds <= TIMESTAMP_MAX_RAW:
        raise EncodeError(f"Compile time {value.isoformat()} is outside the 32-bit timestamp range")
    return seconds


def is_unknown_timestamp(value: datetime) -> bool:
    return value in (TIMESTAMP_UNKNOWN_MIN, TIMESTAMP_UNKNOWN_MAX)


# 🪟🔍🔚
