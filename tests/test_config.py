import logging

from api.config import Settings
from api.logging_config import setup_logging
from scoring import DuplicateRoundPolicy


def test_settings_defaults(monkeypatch):
    for name in ("DATABASE_URL", "LOG_LEVEL", "CORS_ORIGINS", "DUPLICATE_ROUND_POLICY",
                 "DB_POOL_MIN_SIZE", "DB_POOL_MAX_SIZE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings.database_url is None
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ["http://localhost:5173"]
    assert settings.duplicate_round_policy == DuplicateRoundPolicy.KEEP_ALL
    assert (settings.pool_min_size, settings.pool_max_size) == (1, 10)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/league")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("DUPLICATE_ROUND_POLICY", "best")

    settings = Settings.from_env()
    assert settings.database_url == "postgresql://localhost/league"
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.duplicate_round_policy == DuplicateRoundPolicy.BEST


def test_unknown_policy_warns_and_keeps_all(monkeypatch, caplog):
    monkeypatch.setenv("DUPLICATE_ROUND_POLICY", "sometimes")
    with caplog.at_level(logging.WARNING, logger="api.config"):
        settings = Settings.from_env()
    assert settings.duplicate_round_policy == DuplicateRoundPolicy.KEEP_ALL
    assert "DUPLICATE_ROUND_POLICY" in caplog.text


def test_setup_logging_sets_level():
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING

    setup_logging("nonsense")
    assert logging.getLogger().level == logging.INFO


def test_pool_sizes_from_env(monkeypatch, caplog):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "0")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "lots")
    with caplog.at_level(logging.WARNING, logger="api.config"):
        settings = Settings.from_env()
    assert settings.pool_min_size == 1             # clamped to at least one
    assert settings.pool_max_size == 10
    assert "DB_POOL_MAX_SIZE" in caplog.text
