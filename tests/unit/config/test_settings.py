"""
Tests for Settings loading from the environment.

Both the nested BOT__/HEALTH__ form and the flat names used by hosting
templates (DISCORD_BOT_TOKEN, CLIENT_ID, PORT) must work.
"""

import pytest

from proofbot.config.settings import BotSettings, HealthSettings, Settings, load_settings

_ENV_VARS = [
    "DISCORD_BOT_TOKEN",
    "DISCORD_CLIENT_ID",
    "CLIENT_ID",
    "TOKEN",
    "PORT",
    "HEALTH_PORT",
    "BOT__TOKEN",
    "BOT__CLIENT_ID",
    "HEALTH__PORT",
    "LOG_LEVEL",
    "LOG_FILE",
    "ENVIRONMENT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's real environment and .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self):
        settings = Settings()
        assert settings.bot.token == ""
        assert settings.bot.client_id is None
        assert settings.bot.command_prefix == "!"
        assert settings.health.port == 3000
        assert settings.health.enabled is True
        assert settings.log_level == "INFO"


class TestFlatEnvNames:
    def test_discord_bot_token_and_client_id(self, monkeypatch):
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "secret")
        monkeypatch.setenv("CLIENT_ID", "1234567890")
        bot = BotSettings()
        assert bot.token == "secret"
        assert bot.client_id == 1234567890

    def test_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert HealthSettings().port == 8080


class TestNestedEnvNames:
    def test_nested_values(self, monkeypatch):
        monkeypatch.setenv("BOT__TOKEN", "nested-secret")
        monkeypatch.setenv("HEALTH__PORT", "9000")
        settings = Settings()
        assert settings.bot.token == "nested-secret"
        assert settings.health.port == 9000


class TestEnvFile:
    def test_load_settings_from_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("LOG_LEVEL=DEBUG\nBOT__TOKEN=from-file\n")
        settings = load_settings(env_file=env_file)
        assert settings.log_level == "DEBUG"
        assert settings.bot.token == "from-file"

    def test_flat_names_from_custom_env_file(self, tmp_path):
        """DISCORD_BOT_TOKEN / CLIENT_ID / PORT work from --env-file, not just ./.env."""
        env_file = tmp_path / "prod.env"
        env_file.write_text("DISCORD_BOT_TOKEN=secret\nCLIENT_ID=42\nPORT=8080\n")
        settings = load_settings(env_file=env_file)
        assert (settings.bot.token, settings.health.port) == ("secret", 8080)
        assert settings.bot.client_id == 42

    def test_nested_names_win_over_flat_names(self, tmp_path):
        env_file = tmp_path / "prod.env"
        env_file.write_text("DISCORD_BOT_TOKEN=flat\nBOT__TOKEN=nested\n")
        settings = load_settings(env_file=env_file)
        assert settings.bot.token == "nested"

    def test_invalid_port_rejected(self, monkeypatch):
        monkeypatch.setenv("PORT", "70000")
        with pytest.raises(ValueError):
            HealthSettings()
