"""Tests for configuration and the command-line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from transdesk.cli import main
from transdesk.core.config import AppConfig
from transdesk.core.logging import get_logger, logger, setup_logging
from transdesk.core.providers import LibreTranslateProvider, MyMemoryProvider

ENV = {
    "TRANSDESK_LANGUAGES": "zh,en,ja",
    "TRANSDESK_DEFAULT_LANGUAGE": "zh",
    "TRANSDESK_PROVIDER": "",
    "TRANSDESK_LOG_LEVEL": "WARNING",
    "TRANSDESK_LOG_FILE": "",
}


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers bound to the runner's output stream."""
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestAppConfig:
    """Tests for environment configuration."""

    def test_defaults(self, monkeypatch):
        """Test defaults without environment variables."""
        for name in list(ENV) + ["TRANSDESK_TIMEOUT", "TRANSDESK_API_URL"]:
            monkeypatch.delenv(name, raising=False)
        config = AppConfig.from_env()

        assert config.default_language == "zh"
        assert config.languages == ["zh", "en"]
        assert config.provider == ""
        assert config.build_providers().is_configured() is False

    def test_from_env(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("TRANSDESK_LANGUAGES", " zh, EN ,ja,,en")
        monkeypatch.setenv("TRANSDESK_PROVIDER", "libretranslate")
        monkeypatch.setenv("TRANSDESK_PROVIDER_URL", "http://lt.local/translate")
        monkeypatch.setenv("TRANSDESK_TIMEOUT", "12.5")
        config = AppConfig.from_env()

        assert config.languages == ["zh", "en", "ja"]
        assert config.timeout == 12.5
        assert config.catalog.translation_codes == ["en", "ja"]

        provider = config.build_providers().active
        assert isinstance(provider, LibreTranslateProvider)
        assert provider.api_url == "http://lt.local/translate"

    def test_invalid_timeout(self, monkeypatch):
        """Test invalid numbers name the variable."""
        monkeypatch.setenv("TRANSDESK_TIMEOUT", "soon")

        with pytest.raises(ValueError, match="TRANSDESK_TIMEOUT"):
            AppConfig.from_env()

    def test_unknown_provider(self):
        """Test unknown providers are rejected."""
        with pytest.raises(ValueError):
            AppConfig(provider="babelfish")

    def test_mymemory_provider(self):
        """Test MyMemory gets the contact e-mail."""
        config = AppConfig(provider="mymemory", provider_email="ops@example.com")
        provider = config.build_providers().active

        assert isinstance(provider, MyMemoryProvider)
        assert provider.email == "ops@example.com"

    def test_default_always_in_catalog(self):
        """Test the default language is added to the catalog when missing."""
        config = AppConfig(default_language="zh", languages=["en", "ja"])

        assert config.catalog.codes == ["zh", "en", "ja"]


class TestLogging:
    """Tests for logging setup."""

    def test_console_and_file(self, tmp_path, capsys):
        """Test records go to stderr and the log file, never stdout."""
        log_file = tmp_path / "logs" / "transdesk.log"
        setup_logging("debug", log_file)
        get_logger("store").debug("wrote en.title")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "DEBUG transdesk.store: wrote en.title" in captured.err
        assert "wrote en.title" in log_file.read_text(encoding="utf-8")

    def test_setup_replaces_handlers(self):
        """Test repeated setup does not stack handlers."""
        setup_logging("INFO")
        setup_logging("WARNING")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_cli_log_file(self, tmp_path):
        """Test the log file can be set from the environment."""
        log_file = tmp_path / "cli.log"
        env = {**ENV, "TRANSDESK_LOG_FILE": str(log_file), "TRANSDESK_LOG_LEVEL": "DEBUG"}
        payload = tmp_path / "category.json"
        payload.write_text(json.dumps({"name": "新闻", "translations": [{"name": "x"}]}), encoding="utf-8")

        result = CliRunner().invoke(main, ["progress", str(payload), "--kind", "category"], env=env)

        assert result.exit_code == 0
        assert "Dropping" in log_file.read_text(encoding="utf-8")


class TestCli:
    """Tests for CLI commands."""

    def test_languages(self):
        """Test listing languages marks the default."""
        result = CliRunner().invoke(main, ["languages"], env=ENV)

        assert result.exit_code == 0
        assert "zh" in result.output
        assert "(default)" in result.output
        assert "日本語" in result.output

    def test_progress(self, tmp_path):
        """Test progress of a saved payload."""
        payload = {
            "title": "标题",
            "content": "正文",
            "summary": "摘要",
            "default_lang": "zh",
            "translations": [
                {"language": "en", "title": "Title"},
                {"title": "missing language"},
            ],
        }
        path = tmp_path / "article.json"
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")

        result = CliRunner().invoke(main, ["progress", str(path)], env=ENV)

        assert result.exit_code == 0
        assert "100%" in result.output
        assert " 33%" in result.output
        assert "Overall: 17%" in result.output
        assert "dropped translation entry #1" in result.output

    def test_progress_invalid_json(self, tmp_path):
        """Test invalid JSON exits with an error."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = CliRunner().invoke(main, ["progress", str(path)], env=ENV)

        assert result.exit_code == 1

    def test_translate_requires_provider(self):
        """Test translate refuses to run without a provider."""
        result = CliRunner().invoke(main, ["translate", "7", "--target", "en"], env=ENV)

        assert result.exit_code == 1

    def test_translate_requires_id(self):
        """Test articles need an id."""
        result = CliRunner().invoke(main, ["translate", "--target", "en"], env=ENV)

        assert result.exit_code == 1
