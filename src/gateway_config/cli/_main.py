# src/gateway_config/cli/_main.py

import tomllib

import click
from loguru import logger

from gateway_config.config_loader import SettingsError
from gateway_config.core.config import get_app_settings
from gateway_config.config_logger import init_logging

from .cmd_config import cmd_config
from .cmd_show import cmd_show
from .cmd_reload import cmd_reload, cmd_watch
from .cmd_validate import cmd_validate


@click.group(
    invoke_without_command=True,
    context_settings={"max_content_width": 120},
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        case_sensitive=False,
    ),
    help="Override the log level defined in the settings file.",
)
@click.option(
    "--config-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Load an alternate settings file (config.toml) instead of the default.",
)
@click.pass_context
def cli(ctx, log_level, config_file):
    """
    gateway-config — load and hot-refresh the gateway proxy configuration.

    \b
    Sources:
        1) bundled proxy.yaml (read once at startup)
        2) ./config/proxy.yaml (re-read on every refresh, overrides 1)

    \b
    Commands:
        gateway-config show       - load both sources and print the result
        gateway-config reload     - run one load and report what changed
        gateway-config watch      - keep refreshing from ./config/proxy.yaml
        gateway-config validate   - check a proxy.yaml without applying it
    """
    ctx.ensure_object(dict)

    try:
        settings = get_app_settings(config_file_override=config_file)
    except (SettingsError, tomllib.TOMLDecodeError) as e:
        raise click.BadParameter(str(e), param_hint="settings file (config.toml)")
    ctx.obj["settings"] = settings
    ctx.obj["config_file"] = config_file

    # ------------------------------------------------------------
    # Initialize logging AFTER settings are known
    # ------------------------------------------------------------
    ctx.obj["log_level_effective"] = log_level or settings.log_level

    init_logging(level=ctx.obj["log_level_effective"])
    logger.debug(f"Loaded settings from: {settings.loaded_from}")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


cli.add_command(cmd_config)
cli.add_command(cmd_show)
cli.add_command(cmd_reload)
cli.add_command(cmd_watch)
cli.add_command(cmd_validate)
