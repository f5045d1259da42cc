from app.config import Settings


def _settings(**overrides) -> Settings:
    values = {
        "SUPABASE_URL": "https://abc123.supabase.co/",
        "SUPABASE_DB_URL": "postgresql://localhost/postgres",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_jwks_url_derived_from_supabase_url():
    assert _settings().jwks_url() == "https://abc123.supabase.co/auth/v1/.well-known/jwks.json"


def test_explicit_jwks_url_wins():
    settings = _settings(SUPABASE_JWKS_URL="https://keys.example.com/jwks.json")

    assert settings.jwks_url() == "https://keys.example.com/jwks.json"


def test_development_pool_is_capped():
    config = _settings(environment="development", DB_POOL_MIN_SIZE=5, DB_POOL_MAX_SIZE=20).get_db_pool_config()

    assert config["min_size"] == 2
    assert config["max_size"] == 6
    assert config["timeout"] == 15.0


def test_production_pool_uses_configured_values():
    config = _settings(environment="production", DB_POOL_MIN_SIZE=5, DB_POOL_MAX_SIZE=20).get_db_pool_config()

    assert config["min_size"] == 5
    assert config["max_size"] == 20
    assert config["timeout"] == 30.0
