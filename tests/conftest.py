#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures and helpers for pehead tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
import shutil
import struct
import tempfile
from typing import Any

import provide.testkit  # noqa: F401 - Installs setproctitle blocker early
from provide.testkit.logger import reset_foundation_setup_for_testing
import pytest

MAGIC_ROM = 0x107
MAGIC_PE32 = 0x10B
MAGIC_PE32_PLUS = 0x20B

DOS_MESSAGE = b"This program cannot be run in DOS mode.\r\r\n$"

DEFAULT_DIRECTORIES: tuple[tuple[int, int], ...] = (
    (0x0, 0x0),  # export
    (0x2040, 0x28),  # import
    (0x4000, 0x1E0),  # resource
    (0x0, 0x0),
    (0x0, 0x0),
    (0x5000, 0x10),  # base relocation
) + ((0x0, 0x0),) * 10

DEFAULT_SECTIONS: tuple[tuple[bytes, int], ...] = (
    (b".text", 0x60000020),
    (b".data", 0xC0000040),
    (b".rsrc", 0x40000040),
)


def build_pe_image(
    *,
    magic: int | None = MAGIC_PE32,
    pe_offset: int = 0x80,
    machine: int = 0x14C,
    timestamp: int = 0x5F5E1000,
    characteristics: int = 0x0102,
    directories: Sequence[tuple[int, int]] = DEFAULT_DIRECTORIES,
    raw_directory_count: int | None = None,
    sections: Sequence[tuple[bytes, int]] = DEFAULT_SECTIONS,
    signature: bytes = b"PE\x00\x00",
    image_base: int | None = None,
    stack_reserve: int | None = None,
    base_of_data: int = 0x2000,
    trailing: bytes = b"",
) -> bytes:
    """Build a synthetic PE header region.

    Args:
        magic: Optional header magic, or None for an object file without one
        pe_offset: e_lfanew value and DOS stub length
        raw_directory_count: NumberOfRvaAndSizes as stored (defaults to len(directories))
        trailing: Bytes appended after the section table

    Returns:
        Header region bytes followed by trailing
    """
    stub = bytearray(pe_offset)
    stub[0:2] = b"MZ"
    if pe_offset >= 0x4E + len(DOS_MESSAGE):
        stub[0x4E : 0x4E + len(DOS_MESSAGE)] = DOS_MESSAGE
    if pe_offset >= 0x40:
        struct.pack_into("<I", stub, 0x3C, pe_offset)

    optional = b""
    if magic is not None:
        count = len(directories) if raw_directory_count is None else raw_directory_count
        if magic == MAGIC_PE32_PLUS:
            standard = struct.pack("<BBIIIII", 14, 29, 0x1000, 0x800, 0, 0x1100, 0x1000)
            windows = struct.pack(
                "<QIIHHHHHHIIIIHHQQQQII",
                0x140000000 if image_base is None else image_base,
                0x1000,
                0x200,
                6,
                0,
                1,
                2,
                6,
                0,
                0,
                0x6000,
                0x400,
                0x1234,
                3,
                0x8160,
                0x100000000 if stack_reserve is None else stack_reserve,
                0x1000,
                0x100000,
                0x1000,
                0,
                count,
            )
        else:
            standard = struct.pack("<BBIIIIII", 14, 29, 0x1000, 0x800, 0, 0x1100, 0x1000, base_of_data)
            windows = struct.pack(
                "<IIIHHHHHHIIIIHHIIIIII",
                0x400000 if image_base is None else image_base,
                0x1000,
                0x200,
                6,
                0,
                1,
                2,
                6,
                0,
                0,
                0x6000,
                0x400,
                0x1234,
                2,
                0x0140,
                0x100000 if stack_reserve is None else stack_reserve,
                0x1000,
                0x100000,
                0x1000,
                0,
                count,
            )
        table = b"".join(struct.pack("<II", va, size) for va, size in directories)
        optional = struct.pack("<H", magic) + standard + windows + table

    coff = struct.pack(
        "<HHIIIHH",
        machine,
        len(sections),
        timestamp,
        0,
        0,
        len(optional),
        characteristics,
    )

    section_table = b"".join(
        struct.pack(
            "<8sIIIIIIHHI",
            name,
            0x1000 + index,
            0x1000 * (index + 1),
            0x200,
            0x400 + 0x200 * index,
            0,
            0,
            0,
            0,
            flags,
        )
        for index, (name, flags) in enumerate(sections)
    )

    return bytes(stub) + signature + coff + optional + section_table + trailing


@pytest.fixture(autouse=True)
def reset_foundation_logging() -> Iterator[None]:
    """Reset foundation logging state before each test to avoid conflicts."""
    reset_foundation_setup_for_testing()
    yield
    reset_foundation_setup_for_testing()


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory that is removed after the test."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_pe_image() -> Callable[..., bytes]:
    """Factory fixture for synthetic PE header regions."""
    return build_pe_image


@pytest.fixture
def pe_file(temp_dir: Path) -> Callable[..., Path]:
    """Factory fixture writing a synthetic PE image to disk."""

    def _write(name: str = "sample.exe", **kwargs: Any) -> Path:
        path = temp_dir / name
        path.write_bytes(build_pe_image(**kwargs))
        return path

    return _write


# 🪟🔍🔚
