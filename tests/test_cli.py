# tests/test_cli.py
"""End-to-end coverage for the dotconf command group."""

import json
import logging

import pytest
import toml
from click.testing import CliRunner

from dotconf.cli import cli


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "app.json"
    path.write_text(json.dumps({
        "server": {"host": "localhost", "port": 8080, "port_text": "9090"},
        "tags": ["a", "b"],
        "name": "demo",
    }))
    return path


def _run(*args):
    return CliRunner().invoke(cli, list(args))


def test_get_value(config_file):
    result = _run("-c", str(config_file), "get", "server.port")
    assert result.exit_code == 0
    assert json.loads(result.output) == 8080


def test_get_nested_mapping(config_file):
    result = _run("-c", str(config_file), "get", "server")
    assert json.loads(result.output)["host"] == "localhost"


def test_get_missing_key(config_file):
    result = _run("-c", str(config_file), "get", "server.nope")
    assert result.exit_code == 1
    assert "Key not found" in result.output


def test_get_typed_converts(config_file):
    result = _run("-c", str(config_file), "get", "server.port_text", "--type", "int")
    assert result.exit_code == 0
    assert json.loads(result.output) == 9090


def test_get_typed_conversion_error(config_file):
    result = _run("-c", str(config_file), "get", "name", "--type", "int")
    assert result.exit_code == 1
    assert "Cannot convert" in result.output


def test_get_typed_string_mismatch(config_file):
    result = _run("-c", str(config_file), "get", "server.port", "--type", "string")
    assert result.exit_code == 0
    assert json.loads(result.output) is None


def test_set_writes_file(config_file):
    result = _run("-c", str(config_file), "set", "server.tls.enabled", "true")
    assert result.exit_code == 0
    data = json.loads(config_file.read_text())
    assert data["server"]["tls"] == {"enabled": True}
    assert data["server"]["port"] == 8080


def test_set_raw_string(config_file):
    _run("-c", str(config_file), "set", "name", "not json")
    assert json.loads(config_file.read_text())["name"] == "not json"


def test_set_invalid_path(config_file):
    result = _run("-c", str(config_file), "set", "a..b", "1")
    assert result.exit_code == 1
    assert "Invalid configuration path" in result.output


def test_set_toml_keeps_format(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text('[db]\nport = 5432\n')
    result = _run("-c", str(path), "set", "db.host", '"localhost"')
    assert result.exit_code == 0
    assert toml.loads(path.read_text()) == {"db": {"port": 5432, "host": "localhost"}}


def test_exists(config_file):
    assert _run("-c", str(config_file), "exists", "server.host").output.strip() == "true"
    result = _run("-c", str(config_file), "exists", "server.nope")
    assert result.exit_code == 1
    assert result.output.strip() == "false"


def test_keys(config_file):
    result = _run("-c", str(config_file), "keys")
    assert result.output.split() == ["name", "server", "tags"]


def test_keys_deep(config_file):
    result = _run("-c", str(config_file), "keys", "--deep")
    assert "server.port_text" in result.output.split()


def test_dump(config_file):
    result = _run("-c", str(config_file), "dump")
    assert json.loads(result.output) == json.loads(config_file.read_text())


def test_convert_to_toml_file(config_file, tmp_path):
    result = _run("-c", str(config_file), "--root", str(tmp_path), "convert", "--to", "toml", "--out", "app.toml")
    assert result.exit_code == 0
    assert toml.loads((tmp_path / "app.toml").read_text())["server"]["port"] == 8080


def test_relative_config_with_root(config_file, tmp_path):
    result = _run("--root", str(tmp_path), "-c", "app.json", "get", "name")
    assert json.loads(result.output) == "demo"


def test_missing_config_file(tmp_path):
    result = _run("-c", str(tmp_path / "nope.json"), "dump")
    assert result.exit_code == 1
    assert "Error" in result.output


def test_invalid_utf8_config_file(tmp_path):
    path = tmp_path / "latin.json"
    path.write_bytes(b'{"a": "\xff\xfe"}')
    result = _run("-c", str(path), "dump")
    assert result.exit_code == 1
    assert "not valid UTF-8" in result.output


def test_set_null_in_toml_warns(tmp_path, caplog):
    path = tmp_path / "app.toml"
    path.write_text('[db]\nport = 5432\nhost = "localhost"\n')
    with caplog.at_level(logging.WARNING, logger="dotconf.loader"):
        result = _run("-c", str(path), "set", "db.host", "null")
    assert result.exit_code == 0
    assert "db.host" in caplog.text
    assert toml.loads(path.read_text()) == {"db": {"port": 5432}}
