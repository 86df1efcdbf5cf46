import yaml
from click.testing import CliRunner

from gateway_config.cli._main import cli


OVERRIDE = """
proxy:
  services:
    - host: indy
      port: 8080
      methods: [GET]
      path-pattern: /api/.+
"""


def test_show_yaml_with_bundled_defaults_only():
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR", "show", "--format", "yaml"])

    assert result.exit_code == 0, result.output
    data = yaml.safe_load(result.stdout)
    assert data == {"proxy": {"retry": {"count": 3, "interval": 3000}, "services": []}}


def test_show_yaml_includes_override(write_override):
    write_override(OVERRIDE)

    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR", "show", "--format", "yaml"])

    assert result.exit_code == 0, result.output
    data = yaml.safe_load(result.stdout)
    assert data["proxy"]["retry"] == {"count": 3, "interval": 3000}
    assert data["proxy"]["services"] == [
        {"host": "indy", "port": 8080, "methods": ["GET"], "path-pattern": "/api/.+"}
    ]


def test_show_text_survives_broken_override(write_override):
    """A broken ./config/proxy.yaml must not crash `show`."""
    write_override("proxy: [broken")

    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "CRITICAL", "show"])

    assert result.exit_code == 0, result.output
    assert "count=3 interval=3000ms" in result.stdout
    assert "services:  0" in result.stdout


def test_no_subcommand_prints_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR"])

    assert result.exit_code == 0
    assert "gateway-config" in result.stdout
