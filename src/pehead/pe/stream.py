#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Sequential little-endian reads over a random-access byte source."""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from pehead.exceptions import ShortReadError

U16 = struct.Struct("<H")
U32 = struct.Struct("<I")


class ByteReader:
    """Reads fixed-size fields from a binary stream, failing on short reads."""

    def __init__(self, source: BinaryIO | bytes | bytearray | memoryview) -> None:
        if isinstance(source, bytes | bytearray | memoryview):
            source = io.BytesIO(bytes(source))
        self._stream = source

    def tell(self) -> int:
        return self._stream.tell()

    def seek(self, offset: int) -> None:
        self._stream.seek(offset, io.SEEK_SET)

    def remaining(self) -> int:
        """Bytes left between the current position and the end of the source."""
        position = self._stream.tell()
        end = self._stream.seek(0, io.SEEK_END)
        self._stream.seek(position, io.SEEK_SET)
        return end - position

    def read_exact(self, size: int, what: str) -> bytes:
        """
        Read exactly size bytes.

        Args:
            size: Number of bytes to read
            what: Field name used in the error message

        Raises:
            ShortReadError: If the source ends first
        """
        offset = self.tell()
        remaining = self.remaining()
        if size > remaining:
            raise ShortReadError(what, offset, size, max(remaining, 0))
        data = self._stream.read(size)
        if len(data) != size:
            raise ShortReadError(what, offset, size, len(data))
        return data

    def unpack(self, layout: struct.Struct, what: str) -> tuple[int, ...]:
        return layout.unpack(self.read_exact(layout.size, what))

    def read_u16(self, what: str) -> int:
        value: int = self.unpack(U16, what)[0]
        return value

    def read_u32(self, what: str) -> int:
        value: int = self.unpack(U32, what)[0]
        return value


# 🪟🔍🔚
