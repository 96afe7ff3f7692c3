#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""pehead core package exports."""

from __future__ import annotations

from provide.foundation.utils import get_version

from pehead.exceptions import (
    DecodeError,
    EncodeError,
    FlagExpansionError,
    PEHeadError,
    ShortReadError,
    UnsupportedFormatError,
)
from pehead.inspection import inspect_file, inspect_files, render_results
from pehead.pe import PEHeader, Section, expand_flags

__version__ = get_version("pehead", caller_file=__file__)

__all__ = [
    "DecodeError",
    "EncodeError",
    "FlagExpansionError",
    "PEHeadError",
    "PEHeader",
    "Section",
    "ShortReadError",
    "UnsupportedFormatError",
    "__version__",
    "expand_flags",
    "inspect_file",
    "inspect_files",
    "render_results",
]

# 🪟🔍🔚
