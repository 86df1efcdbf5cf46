# src/gateway_config/core/store.py

"""
Process-wide proxy configuration, shared between the reload flow (writer)
and the proxy's routing layer (readers).

Use:
    from gateway_config.core.store import get_configuration

    cfg = get_configuration()
    for route in cfg.get_services():
        ...
    retry = cfg.get_retry()      # RetryPolicy or None

Guarantees:
  • get_configuration() always returns the same instance; it starts empty
    (no retry, no services) and is only ever merged into.
  • The service set may be iterated while a reload runs; iteration walks a
    snapshot taken under the set's lock.
  • RetryPolicy is updated field by field without a lock, so a reader can
    briefly see the new count with the old interval.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Tuple

from gateway_config.core.settings_schema import RetryPolicy, ServiceRoute


class ServiceRouteSet:
    """Thread-safe set of routes keyed by (host, port)."""

    def __init__(self):
        self._lock = threading.RLock()
        self._routes: Dict[Tuple[str, int], ServiceRoute] = {}

    def add(self, route: ServiceRoute) -> bool:
        """Insert if no route has this (host, port). Returns True if inserted."""
        with self._lock:
            if route.key in self._routes:
                return False
            self._routes[route.key] = route
            return True

    def discard(self, route: ServiceRoute) -> bool:
        """Remove the route with this (host, port), if any."""
        with self._lock:
            return self._routes.pop(route.key, None) is not None

    def replace(self, route: ServiceRoute) -> Optional[ServiceRoute]:
        """
        Remove any route with the same (host, port), then add `route`.
        Returns the route that was replaced, or None.
        """
        with self._lock:
            previous = self._routes.pop(route.key, None)
            self._routes[route.key] = route
            return previous

    def get(self, host: str, port: int) -> Optional[ServiceRoute]:
        with self._lock:
            return self._routes.get((host, port))

    def snapshot(self) -> List[ServiceRoute]:
        with self._lock:
            return list(self._routes.values())

    def __contains__(self, route: object) -> bool:
        if not isinstance(route, ServiceRoute):
            return False
        with self._lock:
            return route.key in self._routes

    def __iter__(self) -> Iterator[ServiceRoute]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)

    def __repr__(self) -> str:
        return f"{self.snapshot()!r}"


class ProxyConfiguration:
    """Live proxy settings: retry policy plus the set of service routes."""

    def __init__(self):
        self.retry: Optional[RetryPolicy] = None
        self.services = ServiceRouteSet()

    def get_services(self) -> ServiceRouteSet:
        return self.services

    def get_retry(self) -> Optional[RetryPolicy]:
        return self.retry

    def to_dict(self) -> dict:
        routes = sorted(self.services.snapshot(), key=lambda r: r.key)
        return {
            "retry": self.retry.to_dict() if self.retry is not None else None,
            "services": [r.to_dict() for r in routes],
        }

    def __str__(self) -> str:
        return f"ProxyConfiguration{{retry={self.retry}, services={self.services}}}"


@lru_cache(maxsize=1)
def get_configuration() -> ProxyConfiguration:
    """Return the process-wide configuration, created empty on first call."""
    return ProxyConfiguration()
