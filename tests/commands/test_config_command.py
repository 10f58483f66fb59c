"""CLI tests for the config commands."""

from typer.testing import CliRunner

from chomper.config import get_config_manager
from chomper.main import app
from chomper.utils import exit_codes

runner = CliRunner()


def test_view():
    result = runner.invoke(app, ["config", "view"])

    assert result.exit_code == 0, result.output
    assert "api:" in result.output
    assert "chomp_seconds: 1.0" in result.output


def test_set_and_get():
    result = runner.invoke(app, ["config", "set", "animation.enabled", "false"])
    assert result.exit_code == 0, result.output

    assert get_config_manager().get("animation.enabled") is False
    result = runner.invoke(app, ["config", "get", "animation.enabled"])
    assert result.output.strip() == "False"


def test_set_default_filter():
    result = runner.invoke(app, ["config", "set", "ui.default_filter", "week"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["config", "get", "ui.default_filter"])
    assert result.output.strip() == "week"


def test_unknown_key():
    result = runner.invoke(app, ["config", "get", "api.nope"])
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS

    result = runner.invoke(app, ["config", "set", "api.nope", "1"])
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS


def test_invalid_value():
    result = runner.invoke(app, ["config", "set", "animation.dance_seconds", "forever"])
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS


def test_reset():
    get_config_manager().set("api.timeout", 5)

    result = runner.invoke(app, ["config", "reset", "api.timeout", "--yes"])

    assert result.exit_code == 0, result.output
    assert get_config_manager().get("api.timeout") == 30
