#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Public API for decoding PE headers from files."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from provide.foundation import logger
from provide.foundation.serialization import json_dumps

from pehead.config.defaults import DEFAULT_JSON_INDENT, DEFAULT_MAX_WORKERS
from pehead.exceptions import PEHeadError
from pehead.pe.header import PEHeader


def inspect_file(path: str | Path) -> PEHeader:
    """Decode the header region of a single file.

    Args:
        path: File to decode

    Returns:
        The decoded header document

    Raises:
        OSError: If the file cannot be opened or read
        DecodeError: If the header region is truncated or of an unknown format
    """
    return PEHeader.from_file(path)


def _inspect_or_none(path: str) -> tuple[PEHeader | None, str | None]:
    try:
        return inspect_file(path), None
    except (PEHeadError, OSError) as e:
        logger.warning("Unable to parse file as PE", path=path, error=str(e))
        return None, str(e)


def inspect_files_with_errors(
    paths: Iterable[str | Path],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> tuple[dict[str, PEHeader | None], dict[str, str]]:
    """Decode many files, isolating failures per path.

    Each path maps to its header document, or to None when it could not be
    decoded. Failures never stop the remaining paths. With max_workers > 1
    the files are decoded on a thread pool; result order still follows the
    input order.

    Returns:
        Tuple of (results keyed by path, error messages keyed by failed path)
    """
    keys = list(dict.fromkeys(str(p) for p in paths))

    if max_workers > 1 and len(keys) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(_inspect_or_none, keys))
    else:
        outcomes = [_inspect_or_none(key) for key in keys]

    results: dict[str, PEHeader | None] = {}
    errors: dict[str, str] = {}
    for key, (header, error) in zip(keys, outcomes, strict=True):
        results[key] = header
        if error is not None:
            errors[key] = error

    logger.debug(
        "Inspected files",
        total=len(keys),
        failed=len(errors),
        workers=max_workers,
    )
    return results, errors


def inspect_files(
    paths: Iterable[str | Path],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> dict[str, PEHeader | None]:
    """Decode many files; failed paths map to None."""
    results, _ = inspect_files_with_errors(paths, max_workers=max_workers)
    return results


def header_to_data(header: PEHeader | None) -> dict[str, Any] | None:
    return header.to_dict() if header is not None else None


def render_results(results: dict[str, PEHeader | None], pretty: bool = False) -> str:
    """Render a path-keyed result set as JSON text."""
    data = {path: header_to_data(header) for path, header in results.items()}
    return render_json(data, pretty=pretty)


def render_json(data: Any, pretty: bool = False) -> str:
    return json_dumps(data, indent=DEFAULT_JSON_INDENT if pretty else None, default=str)


# 🪟🔍🔚
