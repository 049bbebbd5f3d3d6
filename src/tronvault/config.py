from pydantic_settings import BaseSettings, SettingsConfigDict

from tronvault.exceptions import FatalStartupError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    tron_api_host: str = "https://api.trongrid.io"
    tron_api_header: str = "TRON-PRO-API-KEY"
    tron_api_key: str = ""
    tron_rate_per_second: float = 10.0
    tron_timeout: float = 30.0

    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "tronvault"
    database_url_override: str = ""

    scan_interval: float = 3.0  # seconds between scan iterations
    block_range: int = 10

    receipt_delay: float = 3.0
    receipt_max_attempts: int = 20
    receipt_confirmed: bool = True

    webhook_timeout: float = 30.0
    webhook_max_attempts: int = 15
    webhook_backoff_base: float = 1.0
    webhook_backoff_max: float = 60.0

    log_level: str = "INFO"
    debug: bool = False

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def api_headers(self) -> dict[str, str]:
        if not self.tron_api_key:
            return {}
        return {self.tron_api_header: self.tron_api_key}


def check_preconditions(config: Settings) -> None:
    if not config.tron_api_host.strip():
        raise FatalStartupError("You need to specify TRON_API_HOST")
    if not config.tron_api_header.strip():
        raise FatalStartupError("You need to specify TRON_API_HEADER")

