#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""pehead runtime configuration for CLI startup."""

from __future__ import annotations

from attrs import define
from provide.foundation.config.base import field
from provide.foundation.config.env import RuntimeConfig

from pehead.config.defaults import DEFAULT_LOG_LEVEL, DEFAULT_MAX_WORKERS

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_log_level(value: str) -> str:
    """Validate and normalize log levels."""
    normalized = value.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value}")
    return normalized


def parse_worker_count(value: str | int) -> int:
    """Validate the number of decode workers."""
    count = int(value)
    if count < 1:
        raise ValueError(f"Worker count must be at least 1, got {value}")
    return count


@define
class PEHeadRuntimeConfig(RuntimeConfig):
    """pehead runtime configuration for CLI startup."""

    log_level: str = field(
        default=DEFAULT_LOG_LEVEL,
        env_var="PEHEAD_LOG_LEVEL",
        converter=parse_log_level,
        metadata={"help": "Log level for pehead operations (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)"},
    )

    max_workers: int = field(
        default=DEFAULT_MAX_WORKERS,
        env_var="PEHEAD_MAX_WORKERS",
        converter=parse_worker_count,
        metadata={"help": "Number of threads used to decode multiple files"},
    )


# 🪟🔍🔚
