# src/gateway_config/core/errors.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class ConfigLoadError(Exception):
    """A single proxy.yaml source could not be applied. Always recoverable."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


class SourceReadError(ConfigLoadError):
    """An existing source could not be read."""


class DecodeError(ConfigLoadError):
    """Malformed YAML, missing `proxy` namespace, or a field of the wrong type."""
