#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""pehead configuration built on the Provide Foundation config stack."""

from __future__ import annotations

from pehead.config.runtime import PEHeadRuntimeConfig, parse_log_level, parse_worker_count

__all__ = [
    "PEHeadRuntimeConfig",
    "parse_log_level",
    "parse_worker_count",
]

# 🪟🔍🔚
