#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for flag expansion over the constant tables."""

from __future__ import annotations

import pytest

from pehead.exceptions import FlagExpansionError
from pehead.pe import (
    IMAGE_CHARACTERISTICS,
    MACHINE_TYPES,
    SECTION_FLAGS,
    WINDOWS_SUBSYSTEMS,
    ConstantTable,
    describe,
    expand_flags,
)


class TestMaskExpansion:
    def test_each_set_bit_reported(self) -> None:
        assert expand_flags(0x0103, IMAGE_CHARACTERISTICS) == [
            "IMAGE_FILE_RELOCS_STRIPPED",
            "IMAGE_FILE_EXECUTABLE_IMAGE",
            "IMAGE_FILE_32BIT_MACHINE",
        ]

    def test_zero_value_constants_never_match(self) -> None:
        assert expand_flags(0, SECTION_FLAGS) == []
        assert "RES0" not in expand_flags(0x20, SECTION_FLAGS)

    def test_aliases_both_reported(self) -> None:
        assert expand_flags(0x00020000, SECTION_FLAGS) == [
            "IMAGE_SCN_MEM_PURGEABLE",
            "IMAGE_SCN_MEM_16BIT",
        ]

    def test_multi_bit_constant_needs_all_bits(self) -> None:
        assert expand_flags(0x00100000, SECTION_FLAGS) == ["IMAGE_SCN_ALIGN_1BYTES"]
        assert "IMAGE_SCN_ALIGN_4BYTES" not in expand_flags(0x00200000, SECTION_FLAGS)

    def test_undefined_bits_ignored(self) -> None:
        table = ConstantTable("Test", {"A": 0x1, "B": 0x4}, is_mask=True)
        assert expand_flags(0xFF, table) == ["A", "B"]


class TestOrdinalExpansion:
    def test_exact_match(self) -> None:
        assert expand_flags(0x8664, MACHINE_TYPES) == ["IMAGE_FILE_MACHINE_AMD64"]
        assert expand_flags(0, WINDOWS_SUBSYSTEMS) == ["IMAGE_SUBSYSTEM_UNKNOWN"]

    def test_undefined_value_is_usage_error(self) -> None:
        with pytest.raises(FlagExpansionError, match="not defined in MachineType"):
            expand_flags(0x1234, MACHINE_TYPES)

    def test_usage_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            expand_flags(4, WINDOWS_SUBSYSTEMS)

    def test_describe_falls_back_to_hex(self) -> None:
        assert describe(0x14C, MACHINE_TYPES) == "IMAGE_FILE_MACHINE_I386"
        assert describe(4, WINDOWS_SUBSYSTEMS) == "0x4"


class TestConstantTable:
    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            MACHINE_TYPES.members["NEW"] = 1  # type: ignore[index]

    def test_lookup_helpers(self) -> None:
        assert MACHINE_TYPES.value_of("IMAGE_FILE_MACHINE_ARM64") == 0xAA64
        assert 0xAA64 in MACHINE_TYPES
        assert MACHINE_TYPES.name_of(0xBEEF) is None
        assert not MACHINE_TYPES.is_mask
        assert SECTION_FLAGS.is_mask


# 🪟🔍🔚
