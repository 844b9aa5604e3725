import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TRIVIA_",
        env_file=os.environ.get("TRIVIAAPP_CONFIG_PATH", ".env"),
        extra="ignore",
    )

    SERVER_ADDRESS: str = "localhost:8082"
    # Timeouts are in seconds.
    SERVER_READ_TIMEOUT: float = 15.0
    SERVER_WRITE_TIMEOUT: float = 15.0
    SERVER_IDLE_TIMEOUT: float = 60.0
    GRACEFUL_SHUTDOWN_TIMEOUT: float = 30.0

    API_PREFIX: str = "/factlist/v1"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # "inmem" or "sql"
    REPOSITORY: str = "inmem"
    DB_SOURCE: str = "sqlite://"
    DB_CONNECT_TIMEOUT: float = 5.0

    @property
    def bind_host(self) -> str:
        host, _, _ = self.SERVER_ADDRESS.rpartition(":")
        return host or "0.0.0.0"

    @property
    def bind_port(self) -> int:
        _, _, port = self.SERVER_ADDRESS.rpartition(":")
        return int(port)


settings = Settings()
