#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""PE/COFF header codec.

Decodes the DOS stub, COFF file header, optional header, data directories
and section table into an editable document and encodes it back.
"""

from pehead.pe.constants import (
    DATA_DIRECTORY_TYPES,
    DLL_CHARACTERISTICS,
    IMAGE_CHARACTERISTICS,
    MACHINE_TYPES,
    OPTIONAL_HEADER_MAGIC,
    SECTION_FLAGS,
    WINDOWS_SUBSYSTEMS,
    ConstantTable,
)
from pehead.pe.directories import DataDirectoryEntry, DataDirectoryTable, directory_type
from pehead.pe.flags import describe, expand_flags
from pehead.pe.header import PEHeader
from pehead.pe.optional_header import (
    OptionalHeader,
    PE32OptionalHeader,
    PE32PlusOptionalHeader,
    RomOptionalHeader,
    StandardFields,
    StandardFields32,
    WindowsFields,
    decode_optional_header,
)
from pehead.pe.sections import Section, decode_section_name, encode_section_name
from pehead.pe.stream import ByteReader
from pehead.pe.timestamps import (
    TIMESTAMP_UNKNOWN_MAX,
    TIMESTAMP_UNKNOWN_MIN,
    decode_timestamp,
    encode_timestamp,
)

__all__ = [
    "DATA_DIRECTORY_TYPES",
    "DLL_CHARACTERISTICS",
    "IMAGE_CHARACTERISTICS",
    "MACHINE_TYPES",
    "OPTIONAL_HEADER_MAGIC",
    "SECTION_FLAGS",
    "TIMESTAMP_UNKNOWN_MAX",
    "TIMESTAMP_UNKNOWN_MIN",
    "WINDOWS_SUBSYSTEMS",
    "ByteReader",
    "ConstantTable",
    "DataDirectoryEntry",
    "DataDirectoryTable",
    "OptionalHeader",
    "PE32OptionalHeader",
    "PE32PlusOptionalHeader",
    "PEHeader",
    "RomOptionalHeader",
    "Section",
    "StandardFields",
    "StandardFields32",
    "WindowsFields",
    "decode_optional_header",
    "decode_section_name",
    "decode_timestamp",
    "describe",
    "directory_type",
    "encode_section_name",
    "encode_timestamp",
    "expand_flags",
]
