# src/gateway_config/cli/cmd_reload.py

"""
Reload triggers: a single load, or a polling loop over ./config/proxy.yaml.
"""

from __future__ import annotations

import time

import click
from loguru import logger

from gateway_config.core.reloader import init, load
from gateway_config.core.store import get_configuration


@click.command(name="reload")
@click.option(
    "--init/--no-init",
    "run_init",
    default=True,
    show_default=True,
    help="Also load the bundled proxy.yaml before the override file.",
)
def cmd_reload(run_init):
    """Run one load and report whether the configuration changed."""
    logger.debug(f"cmd_reload invoked (run_init={run_init})")

    changed = load(run_init=run_init)
    if changed:
        click.echo("Configuration updated.")
    else:
        click.echo("No changes applied.")
    click.echo(str(get_configuration()))


@click.command(name="watch")
@click.option(
    "--interval",
    type=float,
    default=None,
    help="Seconds between refreshes. Defaults to [reload] interval_seconds.",
)
@click.option(
    "--iterations",
    type=int,
    default=None,
    help="Stop after this many refreshes (default: run until interrupted).",
)
@click.pass_context
def cmd_watch(ctx, interval, iterations):
    """
    Load once at startup, then re-read ./config/proxy.yaml every INTERVAL seconds.
    Unchanged files are skipped; bad files are logged and ignored.
    """
    if interval is None:
        interval = ctx.obj["settings"].interval_seconds
    if interval < 0:
        raise click.BadParameter("must be >= 0", param_hint="--interval")

    init()
    logger.info(f"Watching for changes every {interval}s")

    done = 0
    try:
        while iterations is None or done < iterations:
            time.sleep(interval)
            if load(run_init=False):
                logger.success(f"Proxy config, {get_configuration()}")
            done += 1
    except KeyboardInterrupt:
        logger.info("Watch stopped")

    click.echo(str(get_configuration()))
