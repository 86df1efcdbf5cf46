# src/gateway_config/cli/cmd_show.py

from __future__ import annotations

import click
import yaml
from loguru import logger

from gateway_config.core.reloader import init
from gateway_config.core.store import ProxyConfiguration


def render_text(configuration: ProxyConfiguration) -> str:
    """Human-readable summary of the live configuration."""
    data = configuration.to_dict()
    lines = []

    retry = data["retry"]
    if retry is None:
        lines.append("retry:     (not set)")
    else:
        lines.append(f"retry:     count={retry['count']} interval={retry['interval']}ms")

    services = data["services"]
    lines.append(f"services:  {len(services)}")
    for sv in services:
        methods = ",".join(sv["methods"]) if sv["methods"] else "*"
        pattern = sv["path-pattern"] or "-"
        lines.append(f"  {sv['host']}:{sv['port']:<6} {methods:<20} {pattern}")

    return "\n".join(lines)


@click.command(name="show")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "yaml"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format.",
)
def cmd_show(output_format):
    """
    Load bundled defaults and ./config/proxy.yaml, then print the merged result.
    """
    logger.debug("cmd_show invoked")
    configuration = init()

    if output_format.lower() == "yaml":
        click.echo(
            yaml.safe_dump({"proxy": configuration.to_dict()}, sort_keys=False),
            nl=False,
        )
        return

    click.echo(render_text(configuration))
