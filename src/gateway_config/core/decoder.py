# src/gateway_config/core/decoder.py

"""
proxy.yaml text → SettingsRecord.

Two stages:
  1. yaml.safe_load → plain nested dict
  2. explicit field-by-field binding of the `proxy:` section

Expected shape:

    proxy:
      retry:
        count: <int>
        interval: <int>          # milliseconds
      services:
        - host: <string>
          port: <int>
          methods: [<string>, ...]
          path-pattern: <string>

Every problem is raised as DecodeError; nothing else escapes.
"""

from __future__ import annotations

from typing import Any, List, Optional

import yaml

from gateway_config.core.errors import DecodeError
from gateway_config.core.settings_schema import (
    RetryPolicy,
    ServiceRoute,
    SettingsRecord,
)

NAMESPACE_KEY = "proxy"
PATH_PATTERN_KEY = "path-pattern"


# ---------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------

def _require_mapping(value: Any, where: str, source: str) -> dict:
    if not isinstance(value, dict):
        raise DecodeError(source, f"'{where}' must be a mapping, got {type(value).__name__}")
    return value


def _int_field(
    section: dict,
    name: str,
    where: str,
    source: str,
    *,
    default: Optional[int] = None,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    value = section.get(name)
    if value is None:
        if default is None:
            raise DecodeError(source, f"'{where}.{name}' is required")
        return default

    # bool is an int subclass; `port: yes` is not a port
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(source, f"'{where}.{name}' must be an integer, got {value!r}")

    if minimum is not None and value < minimum:
        raise DecodeError(source, f"'{where}.{name}' must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise DecodeError(source, f"'{where}.{name}' must be <= {maximum}, got {value}")
    return value


def _optional_str(section: dict, name: str, where: str, source: str) -> Optional[str]:
    value = section.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(source, f"'{where}.{name}' must be a string, got {value!r}")
    return value


# ---------------------------------------------------------------------
# Section binders
# ---------------------------------------------------------------------

def _decode_retry(value: Any, source: str) -> Optional[RetryPolicy]:
    if value is None:
        return None
    section = _require_mapping(value, "retry", source)
    return RetryPolicy(
        count=_int_field(section, "count", "retry", source, default=0, minimum=0),
        interval=_int_field(section, "interval", "retry", source, default=0, minimum=0),
    )


def _decode_route(value: Any, index: int, source: str) -> ServiceRoute:
    where = f"services[{index}]"
    section = _require_mapping(value, where, source)

    host = _optional_str(section, "host", where, source)
    if not host:
        raise DecodeError(source, f"'{where}.host' must be a non-empty string")

    port = _int_field(section, "port", where, source, minimum=1, maximum=65535)

    methods = section.get("methods")
    if methods is not None:
        if not isinstance(methods, list) or not all(isinstance(m, str) for m in methods):
            raise DecodeError(source, f"'{where}.methods' must be a list of strings, got {methods!r}")
        methods = list(methods)

    return ServiceRoute(
        host=host,
        port=port,
        methods=methods,
        path_pattern=_optional_str(section, PATH_PATTERN_KEY, where, source),
    )


def _decode_services(value: Any, source: str) -> Optional[List[ServiceRoute]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise DecodeError(source, f"'services' must be a list, got {type(value).__name__}")
    return [_decode_route(item, i, source) for i, item in enumerate(value)]


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def parse_document(raw_text: str, source: str = "<text>") -> dict:
    """Stage 1: YAML text → top-level mapping."""
    try:
        doc = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise DecodeError(source, f"invalid YAML: {e}") from e
    except RecursionError as e:
        # PyYAML's pure-Python loader recurses once per nesting level
        raise DecodeError(source, "invalid YAML: document nested too deeply") from e
    except (ValueError, TypeError, AttributeError) as e:
        # SafeConstructor converts explicit tags (!!int, !!float, !!timestamp) unchecked
        raise DecodeError(source, f"invalid YAML: {e}") from e

    if not isinstance(doc, dict):
        raise DecodeError(source, "document is not a mapping")
    return doc


def decode_settings(raw_text: str, source: str = "<text>") -> SettingsRecord:
    """
    Decode one proxy.yaml document.

    A document without the top-level `proxy` key contributes nothing and is
    reported as a DecodeError. `proxy:` with no value decodes to an empty
    record.
    """
    doc = parse_document(raw_text, source)

    if NAMESPACE_KEY not in doc:
        raise DecodeError(source, f"missing top-level '{NAMESPACE_KEY}' key")

    proxy = doc[NAMESPACE_KEY]
    if proxy is None:
        return SettingsRecord()
    proxy = _require_mapping(proxy, NAMESPACE_KEY, source)

    return SettingsRecord(
        retry=_decode_retry(proxy.get("retry"), source),
        services=_decode_services(proxy.get("services"), source),
    )
