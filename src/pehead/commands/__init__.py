#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command modules for the pehead CLI."""

from __future__ import annotations

from pehead.commands.dump import dump_command
from pehead.commands.rewrite import rewrite_command

__all__ = [
    "dump_command",
    "rewrite_command",
]

# 🪟🔍🔚
