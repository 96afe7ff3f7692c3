#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Utility helpers for the pehead tooling layer."""

from __future__ import annotations

from pehead.utils.paths import expand_path_argument, expand_path_arguments, has_wildcards

__all__ = [
    "expand_path_argument",
    "expand_path_arguments",
    "has_wildcards",
]

# 🪟🔍🔚
