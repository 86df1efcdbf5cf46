# src/gateway_config/core/config.py

"""
Singleton accessor for the validated tool settings.
"""

from __future__ import annotations
from gateway_config.config_loader import AppSettings, load_app_settings


def get_app_settings(config_file_override: str | None = None) -> AppSettings:
    """
    Return AppSettings (built-in + user override OR custom override),
    cached for all callers.
    """
    if config_file_override:
        return load_app_settings(config_file_override=config_file_override)

    return load_app_settings()
