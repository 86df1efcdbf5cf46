# src/gateway_config/cli/cmd_validate.py

from __future__ import annotations

from pathlib import Path

import click
from loguru import logger

from gateway_config.core.decoder import decode_settings
from gateway_config.core.errors import DecodeError, SourceReadError


@click.command(name="validate")
@click.argument(
    "yaml_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def cmd_validate(ctx, yaml_file):
    """
    Decode YAML_FILE as proxy.yaml without applying it.
    Exits with status 1 if the file would be rejected on reload.
    """
    logger.debug(f"cmd_validate invoked for {yaml_file}")

    try:
        text = yaml_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"INVALID: {SourceReadError(str(yaml_file), str(e))}")
        ctx.exit(1)

    try:
        record = decode_settings(text, str(yaml_file))
    except DecodeError as e:
        click.echo(f"INVALID: {e}")
        ctx.exit(1)

    retry = record.retry
    services = record.services or []

    click.echo(f"OK: {yaml_file}")
    click.echo(f"  retry:     {retry.to_dict() if retry is not None else '(not set)'}")
    click.echo(f"  services:  {len(services)}")
    for sv in services:
        click.echo(f"    {sv.host}:{sv.port}")
