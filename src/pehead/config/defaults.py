#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Centralized default values and PE/COFF layout constants for pehead."""

from __future__ import annotations

# =================================
# Runtime defaults
# =================================
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_WORKERS = 1
DEFAULT_JSON_INDENT = 2

# =================================
# DOS header
# =================================
PE_OFFSET_ADDR = 0x3C  # e_lfanew
MIN_DOS_STUB_SIZE = PE_OFFSET_ADDR + 4

# =================================
# PE / COFF header
# =================================
PE_SIGNATURE = b"PE\x00\x00"
COFF_HEADER_SIZE = 20
SECTION_HEADER_SIZE = 40
SECTION_NAME_SIZE = 8

# NumberOfRvaAndSizes is masked to 31 bits on decode
DIRECTORY_COUNT_MASK = 0x7FFFFFFF

# =================================
# Timestamps
# =================================
TIMESTAMP_MIN_RAW = 0x00000000
TIMESTAMP_MAX_RAW = 0xFFFFFFFF

# 🪟🔍🔚
