#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""PE data directory table.

Each entry is a (virtual address, size) pair. The directory type is derived
from the entry's position in the table and is never stored.
"""

from __future__ import annotations

from collections.abc import Iterator
import struct
from typing import Any

from attrs import define, field
from provide.foundation import logger

from pehead.exceptions import EncodeError
from pehead.pe.constants import DATA_DIRECTORY_TYPES, UNKNOWN_DIRECTORY_TYPE
from pehead.pe.stream import ByteReader

DATA_DIRECTORY_LAYOUT = struct.Struct("<II")


def directory_type(index: int) -> str:
    """Return the canonical directory type for a table position."""
    if 0 <= index < len(DATA_DIRECTORY_TYPES):
        return DATA_DIRECTORY_TYPES[index]
    return UNKNOWN_DIRECTORY_TYPE


@define
class DataDirectoryEntry:
    virtual_address: int = 0
    size: int = 0

    @classmethod
    def decode(cls, reader: ByteReader, index: int = 0) -> DataDirectoryEntry:
        virtual_address, size = reader.unpack(DATA_DIRECTORY_LAYOUT, f"data directory {index}")
        return cls(virtual_address=virtual_address, size=size)

    def encode(self) -> bytes:
        try:
            return DATA_DIRECTORY_LAYOUT.pack(self.virtual_address, self.size)
        except struct.error as e:
            raise EncodeError(f"Cannot encode data directory entry: {e}") from e

    @property
    def is_empty(self) -> bool:
        return self.virtual_address == 0 and self.size == 0


@define
class DataDirectoryTable:
    """Ordered data directory entries from the optional header."""

    entries: list[DataDirectoryEntry] = field(factory=list)

    @classmethod
    def decode(cls, reader: ByteReader, count: int) -> DataDirectoryTable:
        entries = [DataDirectoryEntry.decode(reader, index) for index in range(count)]
        logger.trace("Decoded data directories", count=count)
        return cls(entries=entries)

    def encode(self) -> bytes:
        return b"".join(entry.encode() for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DataDirectoryEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> DataDirectoryEntry:
        return self.entries[index]

    def items(self) -> Iterator[tuple[str, DataDirectoryEntry]]:
        """Yield (directory type, entry) pairs in table order."""
        for index, entry in enumerate(self.entries):
            yield directory_type(index), entry

    def find(self, type_name: str) -> DataDirectoryEntry | None:
        for name, entry in self.items():
            if name == type_name:
                return entry
        return None

    def to_dict(self) -> list[dict[str, Any]]:
        return [
            {
                "entry_type_name": name,
                "virtual_address": entry.virtual_address,
                "size": entry.size,
            }
            for name, entry in self.items()
        ]


# 🪟🔍🔚
