# src/gateway_config/config_loader.py

"""
Settings for the gateway-config tool itself: log level, user override
folder, and the default refresh interval of `gateway-config watch`.

These are NOT the proxy settings: the proxy's retry/services live in
proxy.yaml and are handled by core/reloader.py.

Layers, lowest precedence first:
    1. built-in   gateway_config/config/config.toml
    2. user       <application.config_folder>/config.toml   (optional)
    3. explicit   --config-file                             (replaces 2)

The merged tables are checked and turned into an AppSettings record; a bad
value raises SettingsError naming the offending key and file.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
import tomllib
from importlib.resources import files as pkg_files
from typing import Dict, Any, Tuple
from functools import lru_cache

CONFIG_FILENAME = "config.toml"
BUILTIN_SOURCE = "<built-in defaults>"


class SettingsError(ValueError):
    """A settings value has the wrong type or range."""


@dataclass(frozen=True)
class AppSettings:
    log_level: str = "INFO"
    config_folder: str | None = None
    interval_seconds: float = 30.0
    loaded_from: str = BUILTIN_SOURCE


# ======================================================================
# Helpers
# ======================================================================

def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries, with `override` taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _table(cfg: dict, name: str, source: str) -> dict:
    table = cfg.get(name, {})
    if not isinstance(table, dict):
        raise SettingsError(f"{source}: [{name}] must be a table")
    return table


def build_settings(cfg: dict, source: str = BUILTIN_SOURCE) -> AppSettings:
    """Check merged TOML tables and bind them to AppSettings."""
    app = _table(cfg, "application", source)
    reload_cfg = _table(cfg, "reload", source)

    log_level = app.get("log_level", "INFO")
    if not isinstance(log_level, str) or not log_level.strip():
        raise SettingsError(f"{source}: application.log_level must be a level name, got {log_level!r}")

    folder = app.get("config_folder")
    if folder is not None and not isinstance(folder, str):
        raise SettingsError(f"{source}: application.config_folder must be a path string, got {folder!r}")

    interval = reload_cfg.get("interval_seconds", 30)
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        raise SettingsError(f"{source}: reload.interval_seconds must be a number, got {interval!r}")
    if interval < 0:
        raise SettingsError(f"{source}: reload.interval_seconds must be >= 0, got {interval}")

    return AppSettings(
        log_level=log_level.strip().upper(),
        config_folder=folder or None,
        interval_seconds=float(interval),
        loaded_from=source,
    )


# ======================================================================
# Built-in settings
# ======================================================================

def get_builtin_config_path() -> Path:
    """
    Return the path to the built-in config.toml.
    FATAL if missing (the package was installed without its data files).
    """
    cfg_path = Path(str(pkg_files("gateway_config") / "config" / CONFIG_FILENAME))
    if cfg_path.is_file():
        return cfg_path

    print(
        f"\nFATAL ERROR: Missing built-in configuration file "
        f"`gateway_config/config/{CONFIG_FILENAME}`.\n",
        file=sys.stderr,
    )
    sys.exit(1)


def load_builtin_config() -> dict:
    """Raw tables of the built-in config.toml."""
    with get_builtin_config_path().open("rb") as f:
        return tomllib.load(f)


# ======================================================================
# User override folder (silent)
# ======================================================================

def _load_user_override_folder(builtin_cfg: dict) -> Tuple[dict, str | None]:
    """
    Returns (user_cfg, source_path) for <config_folder>/config.toml, or
    ({}, None) when there is none or it is not valid TOML.
    Never logs: logging is configured from the result of this call.
    """
    folder = builtin_cfg.get("application", {}).get("config_folder")
    if not isinstance(folder, str) or not folder:
        return {}, None

    cfg_path = Path(folder).expanduser().resolve() / CONFIG_FILENAME
    try:
        with cfg_path.open("rb") as f:
            return tomllib.load(f), str(cfg_path)
    except (OSError, tomllib.TOMLDecodeError):
        # No file, or a broken one: the built-in values stand
        return {}, None


# ======================================================================
# Public API
# ======================================================================

@lru_cache(maxsize=4)
def load_app_settings(config_file_override: str | None = None) -> AppSettings:
    """
    Merge the settings layers and validate the result.

    Raises:
        SettingsError   a value is of the wrong type or out of range
        OSError / tomllib.TOMLDecodeError
                        the explicit --config-file cannot be read or parsed
    """
    builtin = load_builtin_config()

    if config_file_override:
        override_path = Path(config_file_override)
        with override_path.open("rb") as f:
            override_cfg = tomllib.load(f)
        return build_settings(_deep_merge(builtin, override_cfg), str(override_path))

    user_cfg, user_path = _load_user_override_folder(builtin)
    return build_settings(_deep_merge(builtin, user_cfg), user_path or BUILTIN_SOURCE)
