#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""PE section table records."""

from __future__ import annotations

import re
import struct
from typing import Any

import attrs
from attrs import define
from provide.foundation import logger

from pehead.config.defaults import SECTION_NAME_SIZE
from pehead.exceptions import EncodeError
from pehead.pe.constants import SECTION_FLAGS
from pehead.pe.flags import expand_flags
from pehead.pe.stream import ByteReader

# Name is decoded separately; the rest follows in this order
SECTION_FIELDS_LAYOUT = struct.Struct("<IIIIIIHHI")
SECTION_HEADER_LAYOUT = struct.Struct("<8sIIIIIIHHI")

LONG_NAME_PATTERN = re.compile(r"^/\d+$")


def decode_section_name(raw: bytes) -> str:
    """Decode an 8-byte section name, dropping trailing NUL padding."""
    return raw.decode("utf-8", errors="replace").rstrip("\x00")


def encode_section_name(name: str) -> bytes:
    """
    Encode a section name into its 8-byte on-disk form.

    Names of up to 8 bytes are NUL-padded. Longer names keep their first
    7 bytes followed by a single NUL.
    """
    encoded = name.encode("utf-8")
    if len(encoded) > SECTION_NAME_SIZE:
        logger.debug("Truncating section name", name=name, length=len(encoded))
        encoded = encoded[: SECTION_NAME_SIZE - 1] + b"\x00"
    return encoded.ljust(SECTION_NAME_SIZE, b"\x00")


@define
class Section:
    name: str = ""
    virtual_size: int = 0
    virtual_address: int = 0
    size_of_raw_data: int = 0
    pointer_to_raw_data: int = 0
    pointer_to_relocations: int = 0
    pointer_to_linenumbers: int = 0
    number_of_relocations: int = 0
    number_of_linenumbers: int = 0
    characteristics: int = 0

    @classmethod
    def decode(cls, reader: ByteReader, index: int = 0) -> Section:
        name = decode_section_name(reader.read_exact(SECTION_NAME_SIZE, f"section {index} name"))
        fields = reader.unpack(SECTION_FIELDS_LAYOUT, f"section {index} header")
        section = cls(name, *fields)
        logger.trace(
            "Decoded section",
            index=index,
            name=section.name,
            virtual_address=f"0x{section.virtual_address:x}",
            pointer_to_raw_data=f"0x{section.pointer_to_raw_data:x}",
        )
        return section

    def encode(self) -> bytes:
        values = attrs.astuple(self)
        try:
            return SECTION_HEADER_LAYOUT.pack(encode_section_name(self.name), *values[1:])
        except struct.error as e:
            raise EncodeError(f"Cannot encode section {self.name!r}: {e}") from e

    @property
    def is_long_name(self) -> bool:
        """True for the `/<offset>` form that points into the COFF string table."""
        return bool(LONG_NAME_PATTERN.match(self.name))

    @property
    def characteristics_map(self) -> list[str]:
        return expand_flags(self.characteristics, SECTION_FLAGS)

    def to_dict(self) -> dict[str, Any]:
        data = attrs.asdict(self)
        data["characteristics_map"] = self.characteristics_map
        return data


# 🪟🔍🔚
