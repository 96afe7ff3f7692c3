#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""COFF/PE header document.

Decodes the header region of a PE image or object file: DOS stub, PE
signature, COFF file header, optional header and section table. The
resulting document re-encodes to the same bytes, except that
NumberOfRvaAndSizes always reflects the actual number of data directories.
"""

from __future__ import annotations

import base64
from datetime import datetime
import os
import struct
from typing import Any, BinaryIO

from attrs import define, field
from provide.foundation import logger

from pehead.config.defaults import MIN_DOS_STUB_SIZE, PE_OFFSET_ADDR, PE_SIGNATURE
from pehead.exceptions import EncodeError
from pehead.pe.constants import IMAGE_CHARACTERISTICS, MACHINE_TYPES
from pehead.pe.flags import describe, expand_flags
from pehead.pe.optional_header import OptionalHeader, decode_optional_header
from pehead.pe.sections import Section
from pehead.pe.stream import U32, ByteReader
from pehead.pe.timestamps import TIMESTAMP_UNKNOWN_MIN, decode_timestamp, encode_timestamp

# Machine, NumberOfSections, TimeDateStamp, PointerToSymbolTable,
# NumberOfSymbols, SizeOfOptionalHeader, Characteristics
COFF_HEADER_LAYOUT = struct.Struct("<HHIIIHH")


@define
class PEHeader:
    """Decoded header region of a PE/COFF file."""

    dos_stub: bytes = b""
    pe_offset: int = 0
    valid_signature: bool = False
    machine: int = 0
    number_of_sections: int = 0
    compile_time: datetime = TIMESTAMP_UNKNOWN_MIN
    pointer_to_symbol_table: int = 0
    number_of_symbols: int = 0
    size_of_optional_header: int = 0
    characteristics: int = 0
    optional_header: OptionalHeader | None = None
    sections: list[Section] = field(factory=list)

    @classmethod
    def decode(cls, source: BinaryIO | bytes | bytearray | ByteReader) -> PEHeader:
        """
        Decode the header region from a random-access byte source.

        An invalid PE signature is recorded in valid_signature and does not
        stop decoding.

        Args:
            source: Binary stream or bytes positioned anywhere; reads are absolute

        Returns:
            Fully decoded header document

        Raises:
            ShortReadError: If the source ends inside any fixed-size field
            UnsupportedFormatError: If the optional header magic is unknown
        """
        reader = source if isinstance(source, ByteReader) else ByteReader(source)

        reader.seek(PE_OFFSET_ADDR)
        pe_offset = reader.read_u32("PE header offset")

        reader.seek(0)
        dos_stub = reader.read_exact(pe_offset, "DOS stub")

        signature = reader.read_exact(len(PE_SIGNATURE), "PE signature")
        valid_signature = signature == PE_SIGNATURE
        if not valid_signature:
            logger.warning(
                "Invalid PE signature",
                expected=PE_SIGNATURE.hex(),
                actual=signature.hex(),
                offset=f"0x{pe_offset:x}",
            )

        (
            machine,
            number_of_sections,
            raw_timestamp,
            pointer_to_symbol_table,
            number_of_symbols,
            size_of_optional_header,
            characteristics,
        ) = reader.unpack(COFF_HEADER_LAYOUT, "COFF header")

        optional_header = decode_optional_header(reader) if size_of_optional_header else None

        sections = [Section.decode(reader, index) for index in range(number_of_sections)]

        header = cls(
            dos_stub=dos_stub,
            pe_offset=pe_offset,
            valid_signature=valid_signature,
            machine=machine,
            number_of_sections=number_of_sections,
            compile_time=decode_timestamp(raw_timestamp),
            pointer_to_symbol_table=pointer_to_symbol_table,
            number_of_symbols=number_of_symbols,
            size_of_optional_header=size_of_optional_header,
            characteristics=characteristics,
            optional_header=optional_header,
            sections=sections,
        )
        logger.debug(
            "Decoded PE header",
            pe_offset=f"0x{pe_offset:x}",
            machine=header.machine_type_name,
            sections=number_of_sections,
            optional_header=optional_header.optional_header_type_name if optional_header else None,
        )
        return header

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> PEHeader:
        """Open a file read-only and decode its header region."""
        logger.trace("Reading PE header", path=str(path))
        with open(path, "rb") as f:
            return cls.decode(f)

    def encode_dos_stub(self) -> bytes:
        """Return the DOS stub sized to pe_offset with e_lfanew set to pe_offset.

        A stub shorter than pe_offset is NUL-padded and a longer one is
        trimmed, so the PE signature always lands where e_lfanew points.

        Raises:
            EncodeError: If pe_offset is too small to hold the e_lfanew field
        """
        if self.pe_offset < MIN_DOS_STUB_SIZE:
            raise EncodeError(
                f"PE header offset 0x{self.pe_offset:x} overlaps e_lfanew at 0x{PE_OFFSET_ADDR:x}; "
                f"the DOS stub must be at least 0x{MIN_DOS_STUB_SIZE:x} bytes"
            )
        stub = bytearray(self.dos_stub[: self.pe_offset])
        if len(stub) < self.pe_offset:
            stub.extend(b"\x00" * (self.pe_offset - len(stub)))
        try:
            U32.pack_into(stub, PE_OFFSET_ADDR, self.pe_offset)
        except struct.error as e:
            raise EncodeError(f"Cannot encode PE header offset: {e}") from e
        return bytes(stub)

    def encode_coff_header(self) -> bytes:
        """Return the PE signature followed by the COFF file header."""
        try:
            coff = COFF_HEADER_LAYOUT.pack(
                self.machine,
                self.number_of_sections,
                encode_timestamp(self.compile_time),
                self.pointer_to_symbol_table,
                self.number_of_symbols,
                self.size_of_optional_header,
                self.characteristics,
            )
        except struct.error as e:
            raise EncodeError(f"Cannot encode COFF header: {e}") from e
        return PE_SIGNATURE + coff

    def encode(self) -> bytes:
        """
        Re-encode the complete header region.

        The PE signature is always written as PE\\0\\0 and NumberOfRvaAndSizes
        is taken from the data directory table.
        """
        parts = [self.encode_dos_stub(), self.encode_coff_header()]
        if self.optional_header is not None:
            parts.append(self.optional_header.encode())
        parts.extend(section.encode() for section in self.sections)
        return b"".join(parts)

    def write(self, stream: BinaryIO) -> int:
        return stream.write(self.encode())

    @property
    def has_optional_header(self) -> bool:
        return self.size_of_optional_header > 0

    @property
    def machine_type_name(self) -> str:
        return describe(self.machine, MACHINE_TYPES)

    @property
    def characteristics_map(self) -> list[str]:
        return expand_flags(self.characteristics, IMAGE_CHARACTERISTICS)

    def section_by_name(self, name: str) -> Section | None:
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def to_dict(self) -> dict[str, Any]:
        """Raw and named projections of every field, suitable for JSON."""
        return {
            "dos_stub": base64.b64encode(self.dos_stub).decode("ascii"),
            "pe_offset": self.pe_offset,
            "valid_pe_header": self.valid_signature,
            "machine_type": self.machine,
            "machine_type_name": self.machine_type_name,
            "number_of_sections": self.number_of_sections,
            "compile_time": self.compile_time.isoformat(),
            "pointer_to_symbol_table": self.pointer_to_symbol_table,
            "number_of_symbols": self.number_of_symbols,
            "size_of_optional_header": self.size_of_optional_header,
            "characteristics": self.characteristics,
            "characteristics_map": self.characteristics_map,
            "has_optional_header": self.has_optional_header,
            "optional_header": self.optional_header.to_dict() if self.optional_header else None,
            "sections": [section.to_dict() for section in self.sections],
        }


# 🪟🔍🔚
