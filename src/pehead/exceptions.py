#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Custom exceptions for pehead."""

from __future__ import annotations

from provide.foundation.errors import FoundationError


class PEHeadError(FoundationError):
    """Base exception for all pehead errors."""

    pass


class DecodeError(PEHeadError):
    """Raised when a header region cannot be decoded."""

    pass


class ShortReadError(DecodeError):
    """Raised when the byte source ends before a fixed-size field is complete."""

    def __init__(self, what: str, offset: int, expected: int, actual: int) -> None:
        self.what = what
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Unexpected end of data reading {what} at offset 0x{offset:x}: "
            f"needed {expected} byte(s), got {actual}"
        )


class UnsupportedFormatError(DecodeError):
    """Raised when the optional header magic is not ROM, PE32 or PE32+."""

    def __init__(self, magic: int) -> None:
        self.magic = magic
        super().__init__(f"Unknown PE format: 0x{magic:04x}")


class EncodeError(PEHeadError):
    """Raised when an in-memory value cannot be represented on disk."""

    pass


class FlagExpansionError(PEHeadError, ValueError):
    """Raised when an ordinal value is not a defined constant."""

    pass


# 🪟🔍🔚
