#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Expand numeric header fields into constant names for display."""

from __future__ import annotations

from pehead.exceptions import FlagExpansionError
from pehead.pe.constants import ConstantTable


def expand_flags(value: int, table: ConstantTable) -> list[str]:
    """
    Expand a header field value into the names of the constants it satisfies.

    Mask-style tables report every non-zero constant whose bits are all set in
    value, in table order. Ordinal-style tables require an exact match.

    Args:
        value: Raw field value
        table: Constant table for the field

    Returns:
        List of constant names

    Raises:
        FlagExpansionError: If an ordinal value is not defined in the table
    """
    if table.is_mask:
        return [name for name, member in table if member != 0 and value & member == member]

    name = table.name_of(value)
    if name is None:
        raise FlagExpansionError(f"0x{value:x} is not defined in {table.name}")
    return [name]


def describe(value: int, table: ConstantTable) -> str:
    """Return the constant name for an ordinal value, or its hex text if undefined."""
    name = table.name_of(value)
    return name if name is not None else f"0x{value:x}"


# 🪟🔍🔚
