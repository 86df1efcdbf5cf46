# tests/conftest.py
import pytest
from loguru import logger

from gateway_config.config_loader import load_app_settings
from gateway_config.core import reloader, store


@pytest.fixture(autouse=True)
def fresh_process_state(tmp_path, monkeypatch):
    """
    Every test starts like a new process: empty singleton configuration,
    no reloader digests, cwd without a ./config/proxy.yaml.
    """
    monkeypatch.chdir(tmp_path)
    store.get_configuration.cache_clear()
    reloader.get_reloader.cache_clear()
    reloader.init.cache_clear()
    load_app_settings.cache_clear()
    yield
    store.get_configuration.cache_clear()
    reloader.get_reloader.cache_clear()
    reloader.init.cache_clear()
    load_app_settings.cache_clear()
    logger.remove()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def write_override(tmp_path):
    """Write <tmp_path>/config/proxy.yaml and return its path."""
    def _write(text: str):
        cfg_dir = tmp_path / "config"
        cfg_dir.mkdir(exist_ok=True)
        path = cfg_dir / "proxy.yaml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write
