# src/gateway_config/cli/cmd_config.py

"""
Inspect the tool's own settings (config.toml), not the proxy settings.
"""

from __future__ import annotations

import click
from loguru import logger

from gateway_config.config_loader import get_builtin_config_path
from gateway_config.core.reloader import bundled_resource, override_path


@click.command(name="config")
@click.pass_context
def cmd_config(ctx):
    """
    Show active settings and where proxy.yaml is read from.
    """
    logger.debug("cmd_config invoked")
    settings = ctx.obj["settings"]

    click.echo("\nConfiguration summary:\n")
    click.echo("  Active settings file:")
    click.echo(f"    {settings.loaded_from}")
    click.echo("  Built-in settings file:")
    click.echo(f"    {get_builtin_config_path()}")

    click.echo("\n  [application]")
    click.echo(f"    log_level         = {settings.log_level}")
    click.echo(f"    log_level (now)   = {ctx.obj.get('log_level_effective')}")
    click.echo(f"    config_folder     = {settings.config_folder}")

    click.echo("\n  [reload]")
    click.echo(f"    interval_seconds  = {settings.interval_seconds:g}")

    resource = bundled_resource()
    override = override_path()

    click.echo("\n  proxy.yaml sources:")
    click.echo(f"    bundled   {resource}  {'[PRESENT]' if resource.is_file() else '[MISSING]'}")
    click.echo(f"    override  {override}  {'[PRESENT]' if override.exists() else '[NOT FOUND]'}")
