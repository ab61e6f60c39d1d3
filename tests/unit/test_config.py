import pytest

from core.config import ConfigManager
from core.env_loader import load_env_file
from core.exceptions import ConfigurationError

CONFIG_VARS = [
    "STORE_BACKEND", "SQLITE_PATH", "DATABASE_URL", "DB_CONNECTION_TIMEOUT",
    "OPENAI_API_KEY", "PUBLIC_API_KEY", "OPENAI_MODEL", "OPENAI_TEMPERATURE",
    "OPENAI_MAX_TOKENS", "OPENAI_TIMEOUT", "OPENAI_MAX_RETRIES", "OPENAI_STRUCTURED_OUTPUT",
    "HOST", "PORT", "CORS_ORIGINS", "TOP_WORDS_LIMIT", "MAX_TEXT_LENGTH",
    "LOG_LEVEL", "VERBOSE_LOGGING", "LLM_DEBUG_LOG",
]


@pytest.fixture
def clean_env(monkeypatch):
    for var in CONFIG_VARS:
        # setenv first so monkeypatch restores variables that .env loading writes
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    return monkeypatch


def test_defaults(clean_env):
    config = ConfigManager(load_env=False).get_config()

    assert config.database.backend == 'sqlite'
    assert config.database.sqlite_path == 'database/database.sqlite'
    assert config.integrations.openai_model == 'gpt-3.5-turbo'
    assert config.app.port == 5000
    assert config.app.cors_origins == ['*']
    assert config.app.top_words_limit == 5
    assert config.has_openai() is False


def test_environment_overrides(clean_env):
    clean_env.setenv("STORE_BACKEND", "MEMORY")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("CORS_ORIGINS", "http://localhost:3000, https://example.com")
    clean_env.setenv("OPENAI_TEMPERATURE", "0.2")
    clean_env.setenv("LOG_LEVEL", "debug")

    config = ConfigManager(load_env=False).get_config()

    assert config.database.backend == 'memory'
    assert config.integrations.openai_api_key == 'sk-test'
    assert config.integrations.openai_temperature == 0.2
    assert config.app.port == 8080
    assert config.app.cors_origins == ['http://localhost:3000', 'https://example.com']
    assert config.app.log_level == 'DEBUG'


def test_public_api_key_fallback(clean_env):
    clean_env.setenv("PUBLIC_API_KEY", "sk-legacy")
    assert ConfigManager(load_env=False).get_config().integrations.openai_api_key == 'sk-legacy'


def test_invalid_integer_raises(clean_env):
    clean_env.setenv("PORT", "eighty")

    with pytest.raises(ConfigurationError) as exc_info:
        ConfigManager(load_env=False).get_config()

    assert "PORT must be an integer, got 'eighty'" in exc_info.value.context['issue']


def test_parse_errors_reported_with_validation_errors(clean_env):
    clean_env.setenv("PORT", "eighty")
    clean_env.setenv("OPENAI_TEMPERATURE", "warm")
    clean_env.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ConfigurationError) as exc_info:
        ConfigManager(load_env=False).get_config()

    issue = exc_info.value.context['issue']
    assert exc_info.value.context['config_key'] == 'config'
    assert "PORT must be an integer" in issue
    assert "OPENAI_TEMPERATURE must be a number" in issue
    assert "LOG_LEVEL" in issue


def test_validation_collects_errors(clean_env):
    clean_env.setenv("STORE_BACKEND", "postgres")
    clean_env.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ConfigurationError) as exc_info:
        ConfigManager(load_env=False).get_config()

    issue = exc_info.value.context['issue']
    assert "DATABASE_URL" in issue
    assert "LOG_LEVEL" in issue


def test_unknown_backend_rejected(clean_env):
    clean_env.setenv("STORE_BACKEND", "redis")
    with pytest.raises(ConfigurationError, match="STORE_BACKEND"):
        ConfigManager(load_env=False).get_config()


def test_env_file_loading(clean_env, tmp_path):
    (tmp_path / ".env").write_text(
        "# comment\n"
        "export OPENAI_MODEL=gpt-4o-mini\n"
        "TOP_WORDS_LIMIT='3'\n"
        "PORT=\"9000\"\n"
        "not a pair\n",
        encoding="utf-8",
    )
    clean_env.setenv("PORT", "7000")

    loaded = load_env_file(".env", base_dir=tmp_path)
    config = ConfigManager(load_env=False).get_config()

    assert loaded == 2
    assert config.integrations.openai_model == 'gpt-4o-mini'
    assert config.app.top_words_limit == 3
    assert config.app.port == 7000


def test_missing_env_file(tmp_path):
    assert load_env_file(".env", base_dir=tmp_path) == 0
