import pytest

from gateway_config.core.decoder import decode_settings
from gateway_config.core.errors import DecodeError
from gateway_config.core.settings_schema import RetryPolicy


FULL_DOC = """
proxy:
  retry:
    count: 3
    interval: 100
  services:
    - host: indy.example.com
      port: 8080
      methods: [GET, HEAD]
      path-pattern: /api/.+
    - host: cache.example.com
      port: 80
"""


def test_decode_full_document():
    record = decode_settings(FULL_DOC)

    assert record.retry == RetryPolicy(count=3, interval=100)
    assert len(record.services) == 2

    first, second = record.services
    assert first.host == "indy.example.com"
    assert first.port == 8080
    assert first.methods == ["GET", "HEAD"]
    assert first.path_pattern == "/api/.+"

    assert second.methods is None
    assert second.path_pattern is None


def test_missing_sections_stay_absent():
    record = decode_settings("proxy:\n  retry:\n    count: 2\n")
    assert record.retry == RetryPolicy(count=2, interval=0)
    assert record.services is None


def test_empty_proxy_section_decodes_to_empty_record():
    record = decode_settings("proxy:\n")
    assert record.retry is None
    assert record.services is None


def test_unknown_keys_are_ignored():
    record = decode_settings("proxy:\n  timeout: 5\n  retry: {count: 1, interval: 2, jitter: 9}\n")
    assert record.retry == RetryPolicy(count=1, interval=2)


def test_missing_namespace_is_decode_error():
    with pytest.raises(DecodeError) as exc:
        decode_settings("retry:\n  count: 3\n", source="test.yaml")
    assert exc.value.source == "test.yaml"
    assert "proxy" in exc.value.message


@pytest.mark.parametrize(
    "text",
    [
        "proxy: [unclosed",
        "",
        "- just\n- a list\n",
        "proxy: 42\n",
        "proxy:\n  retry: 5\n",
        "proxy:\n  services: {host: a}\n",
        "proxy:\n  retry: {count: -1}\n",
        "proxy:\n  retry: {count: true}\n",
        "proxy:\n  services:\n    - host: a\n      port: abc\n",
        "proxy:\n  services:\n    - host: a\n      port: 0\n",
        "proxy:\n  services:\n    - host: a\n      port: 70000\n",
        "proxy:\n  services:\n    - host: a\n",
        "proxy:\n  services:\n    - host: ''\n      port: 1\n",
        "proxy:\n  services:\n    - host: a\n      port: 1\n      methods: GET\n",
        "proxy:\n  services:\n    - host: a\n      port: 1\n      path-pattern: [x]\n",
        "proxy:\n  retry: {count: !!int abc}\n",
        "proxy:\n  retry: {count: !!float abc}\n",
        "proxy:\n  retry: {count: !!timestamp nope}\n",
    ],
)
def test_invalid_documents_raise_decode_error(text):
    with pytest.raises(DecodeError):
        decode_settings(text)


def test_path_pattern_only_binds_from_dashed_name():
    record = decode_settings(
        "proxy:\n  services:\n    - host: a\n      port: 1\n      pathPattern: /x\n"
    )
    assert record.services[0].path_pattern is None


def test_deeply_nested_document_is_decode_error():
    text = "proxy:\n  services: " + "[" * 5000 + "]" * 5000 + "\n"
    with pytest.raises(DecodeError) as exc:
        decode_settings(text, source="deep.yaml")
    assert exc.value.source == "deep.yaml"
