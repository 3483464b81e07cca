"""
Tests for configuration loading.
"""

import os

import pytest

from oeisbot.env import DEFAULT_BASE_URL, DEFAULT_MAX_ID, Settings, load_env, load_settings
from oeisbot.errors import ConfigError


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings({})
        assert settings == Settings()
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.max_id == DEFAULT_MAX_ID
        assert settings.http_retries == 0
        assert settings.max_draws is None
        assert settings.log_level == "INFO"

    def test_overrides(self):
        settings = load_settings({
            "OEIS_BASE_URL": "http://localhost:9000",
            "OEIS_MAX_ID": "1000",
            "OEIS_TIMEOUT": "2.5",
            "OEIS_HTTP_RETRIES": "2",
            "OEIS_MAX_DRAWS": "50",
            "LOG_LEVEL": "debug",
        })
        assert settings.base_url == "http://localhost:9000"
        assert settings.max_id == 1000
        assert settings.timeout == 2.5
        assert settings.http_retries == 2
        assert settings.max_draws == 50
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("env", [
        {"OEIS_MAX_ID": "lots"},
        {"OEIS_MAX_ID": "0"},
        {"OEIS_HTTP_RETRIES": "-1"},
        {"OEIS_TIMEOUT": "0"},
        {"OEIS_TIMEOUT": "soon"},
        {"LOG_LEVEL": "LOUD"},
    ])
    def test_malformed_values(self, env):
        with pytest.raises(ConfigError):
            load_settings(env)

    def test_require_mastodon(self):
        settings = load_settings({
            "MASTODON_INSTANCE_URL": "https://mastodon.example",
            "MASTODON_ACCESS_TOKEN": "secret",
        })
        assert settings.require_mastodon() == ("https://mastodon.example", "secret")

    def test_missing_mastodon_settings(self):
        with pytest.raises(ConfigError, match="MASTODON_INSTANCE_URL"):
            load_settings({}).require_mastodon()
        with pytest.raises(ConfigError, match="MASTODON_ACCESS_TOKEN"):
            load_settings({"MASTODON_INSTANCE_URL": "https://m.example"}).require_mastodon()


class TestLoadEnv:

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_env() is False

    def test_loads_file_without_overriding(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text(
            "# bot settings\nOEISBOT_TEST_A=from_file\nOEISBOT_TEST_B=from_file\n",
            encoding="utf-8",
        )
        monkeypatch.delenv("OEISBOT_TEST_A", raising=False)
        monkeypatch.setenv("OEISBOT_TEST_B", "from_process")

        assert load_env() is True
        assert os.environ["OEISBOT_TEST_A"] == "from_file"
        assert os.environ["OEISBOT_TEST_B"] == "from_process"
        monkeypatch.delenv("OEISBOT_TEST_A")
