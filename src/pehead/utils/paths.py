#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Expand command-line path arguments into concrete file paths."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from provide.foundation import logger

WILDCARD_CHARS = frozenset("*?")


def has_wildcards(arg: str) -> bool:
    return any(ch in WILDCARD_CHARS for ch in arg)


def expand_path_argument(arg: str, cwd: Path | str | None = None) -> list[str]:
    """
    Expand one path argument.

    Arguments containing `*` or `?` are matched against files relative to
    cwd. Anything else is returned as an absolute path, whether or not it
    exists, so that missing files surface as per-path decode failures.

    Args:
        arg: Path or wildcard pattern
        cwd: Base directory (defaults to the process working directory)

    Returns:
        Sorted matching file paths, or the single absolute path
    """
    if not arg:
        return []

    base = Path(cwd) if cwd is not None else Path.cwd()

    if not has_wildcards(arg):
        path = Path(arg)
        return [str((path if path.is_absolute() else base / path).resolve())]

    pattern = Path(arg)
    if pattern.is_absolute():
        anchor = Path(pattern.anchor)
        relative = str(pattern.relative_to(anchor))
    else:
        anchor = base
        relative = arg

    matches = sorted(str(p.resolve()) for p in anchor.glob(relative) if p.is_file())
    logger.trace("Expanded path pattern", pattern=arg, matches=len(matches))
    return matches


def expand_path_arguments(args: Iterable[str], cwd: Path | str | None = None) -> list[str]:
    """Expand several arguments, dropping duplicates while keeping first-seen order."""
    seen: dict[str, None] = {}
    for arg in args:
        for path in expand_path_argument(arg, cwd):
            seen.setdefault(path, None)
    return list(seen)


# 🪟🔍🔚
