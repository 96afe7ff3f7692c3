#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Dump command for the pehead CLI."""

from __future__ import annotations

import click
from provide.foundation.console import perr, pout

from pehead.config import PEHeadRuntimeConfig
from pehead.config.defaults import DEFAULT_MAX_WORKERS
from pehead.console import get_command_logger
from pehead.inspection import header_to_data, inspect_files_with_errors, render_json, render_results
from pehead.utils.paths import expand_path_arguments

# Get structured logger for this command
log = get_command_logger("dump")


@click.command("dump")
@click.argument("paths", nargs=-1, required=True)
@click.option(
    "--array",
    "-a",
    "use_array",
    is_flag=True,
    help="Output an object keyed by path even when only one file was given",
)
@click.option(
    "--format",
    "-f",
    "pretty",
    is_flag=True,
    help="Indent the JSON output instead of writing a single line",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Number of files to decode in parallel",
)
@click.pass_context
def dump_command(
    ctx: click.Context,
    paths: tuple[str, ...],
    use_array: bool,
    pretty: bool,
    workers: int | None,
) -> None:
    """Read PE headers and dump them as JSON.

    PATHS may contain wildcards (* and ?). Files that cannot be read or
    decoded are reported on stderr and appear as null in the output.
    """
    resolved = expand_path_arguments(paths)
    max_workers = workers or _configured_workers(ctx)
    log.debug(
        "Dumping PE headers",
        arguments=len(paths),
        files=len(resolved),
        workers=max_workers,
    )

    results, errors = inspect_files_with_errors(resolved, max_workers=max_workers)
    for path, error in errors.items():
        perr(f"Unable to parse {path} as PE file. Error: {error}")

    if len(resolved) == 1 and not use_array:
        pout(render_json(header_to_data(results[resolved[0]]), pretty=pretty))
    else:
        pout(render_results(results, pretty=pretty))


def _configured_workers(ctx: click.Context) -> int:
    config = (ctx.obj or {}).get("config")
    if isinstance(config, PEHeadRuntimeConfig):
        return config.max_workers
    return DEFAULT_MAX_WORKERS


# 🪟🔍🔚
