import pytest

from leadfinder.core import config


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "abc123")
    monkeypatch.setenv("CACHE_TTL", "120")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_MS", "900000")
    monkeypatch.setenv("RATE_LIMIT_MAX_REQUESTS", "100")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("APP_ENV", "Development")

    settings = config.get_settings()

    assert settings.google_api_key == "abc123"
    assert settings.cache_ttl == 120
    assert settings.allowed_origins == ("https://a.example", "https://b.example")
    assert settings.is_development is True
    assert settings.rate_limit == "100 per 900 second"


def test_get_settings_defaults_and_warnings(monkeypatch, caplog):
    for name in (
        "GOOGLE_PLACES_API_KEY",
        "DATABASE_URL",
        "SUPABASE_URL",
        "SUPABASE_ANON_KEY",
        "APP_ENV",
        "CACHE_TTL",
        "LEADS_CACHE_TTL",
        "ALLOWED_ORIGINS",
        "RATE_LIMIT_MAX_REQUESTS",
        "RATE_LIMIT_WINDOW_MS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    messages = " ".join(caplog.messages)
    assert "GOOGLE_PLACES_API_KEY is not configured" in messages
    assert "DATABASE_URL is not set" in messages
    assert settings.environment == "production"
    assert settings.cache_ttl == 3600
    assert settings.leads_cache_ttl == 86400
    assert settings.rate_limit == "50 per 60 second"
    assert "http://localhost:5173" in settings.allowed_origins
    assert settings.geocode_country == "India"


def test_get_settings_is_memoised(monkeypatch):
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "first")
    first = config.get_settings()
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "second")
    assert config.get_settings() is first


def test_invalid_integer_env_raises(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(ValueError):
        config.get_settings()
