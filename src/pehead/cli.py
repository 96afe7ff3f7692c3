#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""pehead command-line interface entrypoint."""

from __future__ import annotations

from attrs import evolve
import click
from provide.foundation import TelemetryConfig, get_hub
from provide.foundation.utils import get_version

from pehead.commands.dump import dump_command
from pehead.commands.rewrite import rewrite_command
from pehead.config import PEHeadRuntimeConfig

__version__ = get_version("pehead", caller_file=__file__)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="pehead",
    message="%(prog)s version %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Decode and re-encode Windows PE/COFF headers.

    Configure logging and workers via environment variables:
    - PEHEAD_LOG_LEVEL: Set log level for pehead (trace, debug, info, warning, error)
    - PEHEAD_MAX_WORKERS: Number of files decoded in parallel by 'dump'
    - PROVIDE_LOG_FILE: Write logs to file
    """
    ctx.ensure_object(dict)

    # Load pehead configuration from environment
    pehead_config = PEHeadRuntimeConfig.from_env()

    base_telemetry = TelemetryConfig.from_env()

    telemetry_config = evolve(
        base_telemetry,
        service_name="pehead",
        logging=evolve(
            base_telemetry.logging,
            default_level=pehead_config.log_level,  # type: ignore[arg-type]
        ),
    )

    hub = get_hub()
    hub.initialize_foundation(telemetry_config)

    ctx.obj["config"] = pehead_config


cli.add_command(dump_command, name="dump")
cli.add_command(rewrite_command, name="rewrite")

main = cli

if __name__ == "__main__":
    cli()

# 🪟🔍🔚
