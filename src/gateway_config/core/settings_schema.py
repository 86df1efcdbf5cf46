# src/gateway_config/core/settings_schema.py
"""
Proxy settings records.

    RetryPolicy     count / interval (ms), copied in place on reload
    ServiceRoute    one upstream; identity is (host, port) only
    SettingsRecord  what one decoded proxy.yaml contributes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class RetryPolicy:
    count: int = 0
    interval: int = 0

    def copy_from(self, other: "RetryPolicy") -> None:
        """Take both values from `other`; this instance stays the live one."""
        self.count = other.count
        self.interval = other.interval

    def to_dict(self) -> dict:
        return {"count": self.count, "interval": self.interval}


@dataclass(eq=False, frozen=True)
class ServiceRoute:
    """
    An upstream service the proxy forwards to.

    Two routes with the same host and port are the same route, whatever
    their methods or path pattern. Routes are frozen once decoded: a reload
    changes a route's payload by swapping in a new instance under the same
    key, never by editing the live one.
    """

    host: str
    port: int
    methods: Optional[List[str]] = None
    path_pattern: Optional[str] = None

    @property
    def key(self) -> Tuple[str, int]:
        return (self.host, self.port)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ServiceRoute):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "methods": list(self.methods) if self.methods is not None else None,
            "path-pattern": self.path_pattern,
        }


@dataclass
class SettingsRecord:
    """Freshly decoded `proxy:` section. Absent sections stay None."""

    retry: Optional[RetryPolicy] = None
    services: Optional[List[ServiceRoute]] = field(default=None)
