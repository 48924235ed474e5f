"""
🧪 test_cli.py — команди `rate-converter` через typer CliRunner
"""

import json

import pytest
from typer.testing import CliRunner

from rate_converter import main
from rate_converter.config.container import Container
from rate_converter.shared.errors import FetchError

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch, dict_config_factory, fake_fetcher_factory):
    """Підміняє контейнер: тимчасове сховище та фейковий fetcher."""
    store_file = tmp_path / "settings.json"
    state = {"fetcher": fake_fetcher_factory([85.0])}

    def _build():
        config = dict_config_factory({"storage": {"path": str(store_file)}})
        return Container(config, fetcher=state["fetcher"])

    monkeypatch.setattr(main, "build_container", _build)
    state["store_file"] = store_file
    return state


def _stored(store_file):
    return json.loads(store_file.read_text(encoding="utf-8"))


def test_convert_with_live_rate(cli_env):
    result = runner.invoke(main.app, ["convert", "100", "usd", "kgs"])
    assert result.exit_code == 0, result.output
    assert "100.00 USD = 8,500.00 KGS" in result.output
    assert cli_env["fetcher"].calls == 1


def test_convert_offline_skips_network(cli_env):
    result = runner.invoke(main.app, ["convert", "2", "usd", "kgs", "--offline"])
    assert result.exit_code == 0, result.output
    assert "2.00 USD = 175.00 KGS" in result.output
    assert cli_env["fetcher"].calls == 0


def test_convert_falls_back_when_fetch_fails(cli_env, fake_fetcher_factory):
    cli_env["fetcher"] = fake_fetcher_factory([FetchError("offline")])
    result = runner.invoke(main.app, ["convert", "1", "usd", "kgs"])
    assert result.exit_code == 0, result.output
    assert "87.50 KGS" in result.output


@pytest.mark.parametrize("args", [["convert", "0", "usd", "kgs"], ["convert", "10", "usd", "usd"], ["convert", "1", "usd", "gbp"]])
def test_convert_rejects_invalid_input(cli_env, args):
    result = runner.invoke(main.app, args + ["--offline"])
    assert result.exit_code == 1


def test_rate_offline_before_any_fetch(cli_env):
    result = runner.invoke(main.app, ["rate", "--offline"])
    assert result.exit_code == 0, result.output
    assert "Live USD/KGS rate not loaded yet" in result.output
    assert cli_env["fetcher"].calls == 0


def test_rate_refreshes_missing_rate_first(cli_env):
    result = runner.invoke(main.app, ["rate"])
    assert result.exit_code == 0, result.output
    assert "1 USD = 85.0000 KGS" in result.output
    assert cli_env["fetcher"].calls == 1


def test_rate_keeps_working_when_refresh_fails(cli_env, fake_fetcher_factory):
    cli_env["fetcher"] = fake_fetcher_factory([FetchError("down")])
    result = runner.invoke(main.app, ["rate"])
    assert result.exit_code == 0, result.output
    assert "Live USD/KGS rate not loaded yet" in result.output


def test_refresh_then_rate(cli_env):
    refreshed = runner.invoke(main.app, ["refresh"])
    assert refreshed.exit_code == 0, refreshed.output
    assert "1 USD = 85.0000 KGS" in refreshed.output

    shown = runner.invoke(main.app, ["rate"])
    assert shown.exit_code == 0, shown.output
    assert "1 USD = 85.0000 KGS" in shown.output
    assert "Updated:" in shown.output


def test_refresh_failure_exits_with_error(cli_env, fake_fetcher_factory):
    cli_env["fetcher"] = fake_fetcher_factory([FetchError("down")])
    result = runner.invoke(main.app, ["refresh"])
    assert result.exit_code == 1


def test_admin_set_rates(cli_env):
    result = runner.invoke(
        main.app,
        ["admin-set-rates", "--password", "admin", "--eur", "0,9", "--rub", "95", "--kgs", "88", "--no-live"],
    )
    assert result.exit_code == 0, result.output
    assert "Saved" in result.output

    data = _stored(cli_env["store_file"])
    assert data["use_live_kgs_rate"] is False
    assert data["offline_eur_per_usd"] == 0.9
    assert data["offline_kgs_per_usd"] == 88.0


def test_admin_set_rates_wrong_password(cli_env):
    result = runner.invoke(
        main.app,
        ["admin-set-rates", "--password", "nope", "--eur", "1", "--rub", "1", "--kgs", "1"],
    )
    assert result.exit_code == 1
    assert "Wrong password" in result.output
    assert _stored(cli_env["store_file"])["offline_kgs_per_usd"] == 87.5


def test_admin_set_rates_invalid_value(cli_env):
    result = runner.invoke(
        main.app,
        ["admin-set-rates", "--password", "admin", "--eur", "1", "--rub", "abc", "--kgs", "1"],
    )
    assert result.exit_code == 1


def test_admin_password_change(cli_env):
    result = runner.invoke(
        main.app,
        ["admin-password", "--password", "admin", "--new", "s3cret", "--confirm", "s3cret"],
    )
    assert result.exit_code == 0, result.output
    assert "Password changed" in result.output
    assert _stored(cli_env["store_file"])["admin_password"] == "s3cret"


def test_admin_password_mismatch(cli_env):
    result = runner.invoke(
        main.app,
        ["admin-password", "--password", "admin", "--new", "one", "--confirm", "two"],
    )
    assert result.exit_code == 1
    assert _stored(cli_env["store_file"])["admin_password"] == "admin"
