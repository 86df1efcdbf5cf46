# src/gateway_config/core/reloader.py

"""
Loads proxy.yaml into the live ProxyConfiguration.

Sources, in order:
    1. bundled  gateway_config/config/proxy.yaml   (startup only)
    2. override <cwd>/config/proxy.yaml            (every refresh)

Each source goes through the same path: fingerprint check → decode → merge.
A failing source is logged and skipped; the configuration keeps whatever it
had before. load() never raises for a bad or missing source.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from importlib.resources import files as pkg_files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger

from gateway_config.core.decoder import decode_settings
from gateway_config.core.errors import ConfigLoadError, SourceReadError
from gateway_config.core.fingerprint import should_skip
from gateway_config.core.merge import merge
from gateway_config.core.store import ProxyConfiguration, get_configuration

PROXY_YAML = "proxy.yaml"
OVERRIDE_DIRNAME = "config"

SOURCE_RESOURCE = "resource"
SOURCE_FILE = "file"


def bundled_resource() -> Traversable:
    """The proxy.yaml shipped inside the package."""
    return pkg_files("gateway_config") / "config" / PROXY_YAML


def override_path(workdir: Optional[Path] = None) -> Path:
    """<workdir>/config/proxy.yaml, workdir defaulting to the current directory."""
    root = Path(workdir) if workdir is not None else Path.cwd()
    return root / OVERRIDE_DIRNAME / PROXY_YAML


class ConfigReloader:
    """
    Drives loads into one ProxyConfiguration.

    Keeps the digest of the last merged text per source so that re-reading
    an unchanged file is a no-op. Calls to load() are serialized.
    """

    def __init__(
        self,
        configuration: ProxyConfiguration,
        resource: Union[Traversable, Path, None] = None,
        workdir: Optional[Path] = None,
    ):
        self.configuration = configuration
        self.resource = resource if resource is not None else bundled_resource()
        self.workdir = workdir
        self._digests: Dict[str, str] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------
    # Public
    # ------------------------------------------------------------

    def load(self, run_init: bool = False) -> bool:
        """
        Startup load of the bundled resource (only when run_init), then the
        refresh load of the override file.

        Returns True if at least one source was merged.
        """
        with self._lock:
            changed = False
            if run_init:
                changed = self._load_from_resource() or changed
            changed = self._load_from_file() or changed
            return changed

    def digest_for(self, source: str) -> Optional[str]:
        return self._digests.get(source)

    # ------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------

    def _load_from_resource(self) -> bool:
        try:
            if not self.resource.is_file():
                logger.info(f"Skip load, NO_SUCH_RESOURCE, {PROXY_YAML}")
                return False

            logger.info(f"Load from resource, {PROXY_YAML}")
            text = self.resource.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Load failed, {SourceReadError(SOURCE_RESOURCE, str(e))}")
            return False
        return self._do_load(text, SOURCE_RESOURCE)

    def _load_from_file(self) -> bool:
        path = override_path(self.workdir)
        try:
            # exists() itself raises on e.g. EACCES for the config/ directory
            if not path.exists():
                logger.info(f"Skip load, NO_SUCH_FILE, {path}")
                return False

            logger.info(f"Load from file, {path}")
            # the file may vanish between exists() and the read
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Load failed, {SourceReadError(str(path), str(e))}")
            return False
        return self._do_load(text, SOURCE_FILE, label=str(path))

    # ------------------------------------------------------------
    # Shared path
    # ------------------------------------------------------------

    def _do_load(self, text: str, source: str, label: Optional[str] = None) -> bool:
        skip, digest = should_skip(text, self._digests.get(source))
        if skip:
            logger.info(f"Skip, NO_CHANGE, {source}")
            return False

        try:
            parsed = decode_settings(text, label or source)
        except ConfigLoadError as e:
            logger.error(f"Load failed, {e}")
            return False

        logger.info(f"Loaded: {parsed}")
        merge(self.configuration, parsed)
        self._digests[source] = digest
        return True


# ======================================================================
# Process-wide entry points
# ======================================================================

@lru_cache(maxsize=1)
def get_reloader() -> ConfigReloader:
    """The reloader bound to the process-wide configuration."""
    return ConfigReloader(get_configuration())


def load(run_init: bool = False) -> bool:
    """Reload trigger for schedulers and admin hooks."""
    return get_reloader().load(run_init)


@lru_cache(maxsize=1)
def init() -> ProxyConfiguration:
    """
    Startup hook: bundled defaults + override file, exactly once per process.
    Later refreshes go through load(run_init=False).
    """
    load(run_init=True)
    configuration = get_configuration()
    logger.info(f"Proxy config, {configuration}")
    return configuration
