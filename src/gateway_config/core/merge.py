# src/gateway_config/core/merge.py

from __future__ import annotations

from typing import TYPE_CHECKING

from gateway_config.core.settings_schema import SettingsRecord

if TYPE_CHECKING:
    from gateway_config.core.store import ProxyConfiguration


def merge(current: "ProxyConfiguration", incoming: SettingsRecord) -> None:
    """
    Fold a freshly decoded record into the live configuration, in place.

    Retry:
        live is None         → adopt incoming (None stays None)
        both present         → copy values into the live instance
        incoming is None     → untouched
    Services:
        each incoming route replaces the live route with the same (host, port),
        or is added. Routes missing from `incoming` are kept.
    """
    if current.retry is None:
        current.retry = incoming.retry
    elif incoming.retry is not None:
        current.retry.copy_from(incoming.retry)

    if incoming.services:
        for route in incoming.services:
            current.services.replace(route)
