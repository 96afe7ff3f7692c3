#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""PE optional header.

The first two bytes (the magic) select the variant, and the variant alone
decides which fields exist and how wide they are:

- PE32 (0x10B) and ROM (0x107): BaseOfData present, ImageBase and the
  stack/heap sizes are 32-bit
- PE32+ (0x20B): no BaseOfData, ImageBase and the stack/heap sizes are 64-bit

Each variant is its own class with its own layouts. The NumberOfRvaAndSizes
field is recomputed from the data directory table on encode.
"""

from __future__ import annotations

import struct
from typing import Any, ClassVar

import attrs
from attrs import define, field
from provide.foundation import logger

from pehead.config.defaults import DIRECTORY_COUNT_MASK
from pehead.exceptions import EncodeError, UnsupportedFormatError
from pehead.pe.constants import (
    DLL_CHARACTERISTICS,
    MAGIC_PE32,
    MAGIC_PE32_PLUS,
    MAGIC_ROM,
    OPTIONAL_HEADER_MAGIC,
    WINDOWS_SUBSYSTEMS,
)
from pehead.pe.directories import DataDirectoryTable
from pehead.pe.flags import describe, expand_flags
from pehead.pe.stream import ByteReader

MAGIC_LAYOUT = struct.Struct("<H")

# ImageBase, SizeOfStackReserve/Commit and SizeOfHeapReserve/Commit use I or Q
WINDOWS_FIELDS_LAYOUT_32 = struct.Struct("<IIIHHHHHHIIIIHHIIIIII")
WINDOWS_FIELDS_LAYOUT_64 = struct.Struct("<QIIHHHHHHIIIIHHQQQQII")


def _version(major: int, minor: int) -> str:
    return f"{major}.{minor}"


def _pack(layout: struct.Struct, values: tuple[int, ...], what: str) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as e:
        raise EncodeError(f"Cannot encode {what}: {e}") from e


@define
class StandardFields:
    """Standard COFF fields of a PE32+ optional header."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBIIIII")

    major_linker_version: int = 0
    minor_linker_version: int = 0
    size_of_code: int = 0
    size_of_initialized_data: int = 0
    size_of_uninitialized_data: int = 0
    address_of_entry_point: int = 0
    base_of_code: int = 0

    @classmethod
    def decode(cls, reader: ByteReader) -> StandardFields:
        return cls(*reader.unpack(cls.LAYOUT, "optional header standard fields"))

    def encode(self) -> bytes:
        return _pack(self.LAYOUT, attrs.astuple(self), "optional header standard fields")

    @property
    def linker_version(self) -> str:
        return _version(self.major_linker_version, self.minor_linker_version)

    def to_dict(self) -> dict[str, Any]:
        data = attrs.asdict(self)
        data["linker_version"] = self.linker_version
        return data


@define
class StandardFields32(StandardFields):
    """Standard COFF fields of a PE32 or ROM optional header."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBIIIIII")

    base_of_data: int = 0


@define
class WindowsFields:
    """Windows-specific optional header fields.

    Field widths are owned by the optional header variant, not by this class.
    """

    image_base: int = 0
    section_alignment: int = 0
    file_alignment: int = 0
    major_operating_system_version: int = 0
    minor_operating_system_version: int = 0
    major_image_version: int = 0
    minor_image_version: int = 0
    major_subsystem_version: int = 0
    minor_subsystem_version: int = 0
    win32_version_value: int = 0
    size_of_image: int = 0
    size_of_headers: int = 0
    check_sum: int = 0
    subsystem: int = 0
    dll_characteristics: int = 0
    size_of_stack_reserve: int = 0
    size_of_stack_commit: int = 0
    size_of_heap_reserve: int = 0
    size_of_heap_commit: int = 0
    loader_flags: int = 0
    number_of_rva_and_sizes: int = 0

    @classmethod
    def decode(cls, reader: ByteReader, layout: struct.Struct) -> WindowsFields:
        values = list(reader.unpack(layout, "optional header windows fields"))
        raw_count = values[-1]
        values[-1] = raw_count & DIRECTORY_COUNT_MASK
        if values[-1] != raw_count:
            logger.debug(
                "Masked sign bit of NumberOfRvaAndSizes",
                raw=f"0x{raw_count:08x}",
                count=values[-1],
            )
        return cls(*values)

    def encode(self, layout: struct.Struct, directory_count: int) -> bytes:
        values = attrs.astuple(self)[:-1] + (directory_count,)
        return _pack(layout, values, "optional header windows fields")

    @property
    def operating_system_version(self) -> str:
        return _version(self.major_operating_system_version, self.minor_operating_system_version)

    @property
    def image_version(self) -> str:
        return _version(self.major_image_version, self.minor_image_version)

    @property
    def subsystem_version(self) -> str:
        return _version(self.major_subsystem_version, self.minor_subsystem_version)

    @property
    def subsystem_name(self) -> str:
        return describe(self.subsystem, WINDOWS_SUBSYSTEMS)

    @property
    def dll_characteristics_map(self) -> list[str]:
        return expand_flags(self.dll_characteristics, DLL_CHARACTERISTICS)

    def to_dict(self) -> dict[str, Any]:
        data = attrs.asdict(self)
        data.update(
            operating_system_version=self.operating_system_version,
            image_version=self.image_version,
            subsystem_version=self.subsystem_version,
            subsystem_name=self.subsystem_name,
            dll_characteristics_map=self.dll_characteristics_map,
        )
        return data


@define
class OptionalHeader:
    """Base for the optional header variants."""

    MAGIC: ClassVar[int]
    STANDARD_FIELDS: ClassVar[type[StandardFields]]
    WINDOWS_LAYOUT: ClassVar[struct.Struct]

    standard: StandardFields
    windows: WindowsFields = field(factory=WindowsFields)
    data_directories: DataDirectoryTable = field(factory=DataDirectoryTable)

    def __attrs_post_init__(self) -> None:
        if type(self.standard) is not self.STANDARD_FIELDS:
            raise TypeError(
                f"{type(self).__name__} requires {self.STANDARD_FIELDS.__name__}, "
                f"got {type(self.standard).__name__}"
            )

    @classmethod
    def decode_fields(cls, reader: ByteReader) -> OptionalHeader:
        """Decode everything after the magic."""
        standard = cls.STANDARD_FIELDS.decode(reader)
        windows = WindowsFields.decode(reader, cls.WINDOWS_LAYOUT)
        directories = DataDirectoryTable.decode(reader, windows.number_of_rva_and_sizes)
        return cls(standard=standard, windows=windows, data_directories=directories)

    @property
    def magic(self) -> int:
        return self.MAGIC

    @property
    def optional_header_type_name(self) -> str:
        return describe(self.MAGIC, OPTIONAL_HEADER_MAGIC)

    @property
    def size(self) -> int:
        """Encoded size in bytes, including the data directory table."""
        return (
            MAGIC_LAYOUT.size
            + self.STANDARD_FIELDS.LAYOUT.size
            + self.WINDOWS_LAYOUT.size
            + 8 * len(self.data_directories)
        )

    def encode(self) -> bytes:
        return b"".join(
            (
                MAGIC_LAYOUT.pack(self.MAGIC),
                self.standard.encode(),
                self.windows.encode(self.WINDOWS_LAYOUT, len(self.data_directories)),
                self.data_directories.encode(),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "optional_header_type": self.MAGIC,
            "optional_header_type_name": self.optional_header_type_name,
            "standard_fields": self.standard.to_dict(),
            "windows_fields": self.windows.to_dict(),
            "data_directories": self.data_directories.to_dict(),
        }


@define
class PE32OptionalHeader(OptionalHeader):
    MAGIC: ClassVar[int] = MAGIC_PE32
    STANDARD_FIELDS: ClassVar[type[StandardFields]] = StandardFields32
    WINDOWS_LAYOUT: ClassVar[struct.Struct] = WINDOWS_FIELDS_LAYOUT_32


@define
class RomOptionalHeader(PE32OptionalHeader):
    MAGIC: ClassVar[int] = MAGIC_ROM


@define
class PE32PlusOptionalHeader(OptionalHeader):
    MAGIC: ClassVar[int] = MAGIC_PE32_PLUS
    STANDARD_FIELDS: ClassVar[type[StandardFields]] = StandardFields
    WINDOWS_LAYOUT: ClassVar[struct.Struct] = WINDOWS_FIELDS_LAYOUT_64


OPTIONAL_HEADER_VARIANTS: dict[int, type[OptionalHeader]] = {
    variant.MAGIC: variant for variant in (RomOptionalHeader, PE32OptionalHeader, PE32PlusOptionalHeader)
}


def decode_optional_header(reader: ByteReader) -> OptionalHeader:
    """
    Decode an optional header, dispatching on its magic.

    Raises:
        UnsupportedFormatError: If the magic is not ROM, PE32 or PE32+
        ShortReadError: If the source ends inside the header
    """
    offset = reader.tell()
    magic = reader.read_u16("optional header magic")
    variant = OPTIONAL_HEADER_VARIANTS.get(magic)
    if variant is None:
        raise UnsupportedFormatError(magic)

    header = variant.decode_fields(reader)
    logger.debug(
        "Decoded optional header",
        variant=header.optional_header_type_name,
        offset=f"0x{offset:x}",
        directories=len(header.data_directories),
    )
    return header


# 🪟🔍🔚
