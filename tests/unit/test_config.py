from balancemonitor.config import Settings


class TestSettings:
    def test_database_url(self):
        s = Settings(db_host="db", db_port=5433, db_user="u", db_password="p", db_name="balances")
        assert s.database_url == "postgresql+asyncpg://u:p@db:5433/balances"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PRICE_CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("EXCHANGE_MEDIATOR_API_URL", "http://mediator:8080")

        s = Settings()

        assert s.price_cache_ttl_seconds == 60
        assert s.exchange_mediator_api_url == "http://mediator:8080"

    def test_cache_defaults(self):
        s = Settings()
        assert s.price_cache_ttl_seconds == 24 * 3600
        assert s.price_cache_failure_ttl_seconds == 3600
        assert s.price_refresh_interval_seconds == 3600
