from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "balance_monitor"

    price_api_url: str = "http://localhost:9001"
    exchange_mediator_api_url: str = "http://localhost:9001"
    eth_node_url: str = "https://cloudflare-eth.com"
    btc_api_url: str = "https://blockchain.info"

    oauth2_api_url: str = "http://localhost:9002"
    oauth2_client_id: str = "balance-monitor"
    oauth2_client_secret: str = ""

    http_timeout_seconds: float = 5.0
    exchange_mediator_timeout_seconds: float = 60.0  # all wallets from many exchanges

    price_cache_ttl_seconds: int = 24 * 3600
    price_cache_failure_ttl_seconds: int = 3600
    price_cache_refresh_after_seconds: int = 3600
    price_cache_max_size: int = 10_000
    price_refresh_interval_seconds: int = 3600

    debug: bool = False
    log_level: str = "INFO"

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()
