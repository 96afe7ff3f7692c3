#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Rewrite command for the pehead CLI - re-encode a header region."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation.console import perr, pout
from provide.foundation.file import atomic_write
from provide.foundation.file.directory import ensure_parent_dir

from pehead.console import get_command_logger
from pehead.exceptions import PEHeadError
from pehead.inspection import inspect_file

# Get structured logger for this command
log = get_command_logger("rewrite")


@click.command("rewrite")
@click.argument(
    "source",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
)
@click.argument(
    "output_path",
    type=click.Path(dir_okay=False, resolve_path=True),
    required=True,
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite existing output file",
)
def rewrite_command(source: str, output_path: str, force: bool) -> None:
    """Decode SOURCE and write its re-encoded header region to OUTPUT_PATH."""
    source_path = Path(source)
    output = Path(output_path)
    log.debug("Rewriting PE header", source=str(source_path), output=str(output), force=force)

    if output.exists() and not force:
        log.error("Output file already exists", output=str(output))
        perr(f"❌ Output file already exists: {output}")
        perr("Use --force to overwrite")
        raise click.Abort()

    try:
        header = inspect_file(source_path)
        encoded = header.encode()
    except (PEHeadError, OSError) as e:
        log.error("Unable to decode PE header", source=str(source_path), error=str(e))
        perr(f"❌ Unable to parse {source_path} as PE file. Error: {e}")
        raise click.Abort() from e

    if not header.valid_signature:
        perr(f"⚠️  {source_path} has an invalid PE signature; writing PE\\0\\0")

    ensure_parent_dir(output)
    atomic_write(output, encoded)

    with source_path.open("rb") as f:
        original = f.read(len(encoded))
    identical = original == encoded

    log.info(
        "Header region written",
        output=str(output),
        size=len(encoded),
        identical=identical,
    )
    pout(f"Wrote {len(encoded)} header bytes to {output}")
    if identical:
        pout("✅ Header region matches source")
    else:
        pout("⚠️  Header region differs from source (normalized fields)")


# 🪟🔍🔚
