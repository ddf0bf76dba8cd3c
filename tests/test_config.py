"""Tests for client config loading."""

import json

import pytest

from rulebricks.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ClientConfig,
    load_client_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("RULEBRICKS_API_KEY", "RULEBRICKS_BASE_URL", "RULEBRICKS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()
        assert config.api_key == ""
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("RULEBRICKS_API_KEY", "k")
        monkeypatch.setenv("RULEBRICKS_TIMEOUT", "5")
        config = ClientConfig.from_env()
        assert config.api_key == "k"
        assert config.timeout == 5.0

    def test_bad_timeout_env_ignored(self, monkeypatch):
        monkeypatch.setenv("RULEBRICKS_TIMEOUT", "soon")
        assert ClientConfig.from_env().timeout == DEFAULT_TIMEOUT


class TestFromFile:
    def test_reads_client_section(self, tmp_path):
        path = tmp_path / ".rulebricks.json"
        path.write_text(
            json.dumps({"client": {"api_key": "file-key", "base_url": "http://file", "timeout": 9}})
        )

        config = ClientConfig.from_file(path)

        assert config.api_key == "file-key"
        assert config.base_url == "http://file"
        assert config.timeout == 9.0

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / ".rulebricks.json"
        path.write_text(json.dumps({"client": {"api_key": "file-key"}}))
        monkeypatch.setenv("RULEBRICKS_API_KEY", "env-key")

        assert ClientConfig.from_file(path).api_key == "env-key"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ClientConfig.from_file(tmp_path / "nope.json")
        assert config.base_url == DEFAULT_BASE_URL

    def test_invalid_json_logs_and_uses_defaults(self, tmp_path, caplog):
        path = tmp_path / ".rulebricks.json"
        path.write_text("{not json")

        config = ClientConfig.from_file(path)

        assert config.api_key == ""
        assert "Failed to load client config" in caplog.text

    def test_wrongly_typed_values_ignored(self, tmp_path):
        path = tmp_path / ".rulebricks.json"
        path.write_text(json.dumps({"client": {"api_key": 42, "timeout": "fast"}}))

        config = ClientConfig.from_file(path)

        assert config.api_key == ""
        assert config.timeout == DEFAULT_TIMEOUT

    def test_non_object_file_ignored(self, tmp_path):
        path = tmp_path / ".rulebricks.json"
        path.write_text("[1, 2]")
        assert ClientConfig.from_file(path).api_key == ""


class TestLoadClientConfig:
    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".rulebricks.json").write_text(json.dumps({"client": {"api_key": "cwd"}}))
        monkeypatch.chdir(tmp_path)

        assert load_client_config().api_key == "cwd"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"client": {"base_url": "http://custom"}}))
        assert load_client_config(path).base_url == "http://custom"
