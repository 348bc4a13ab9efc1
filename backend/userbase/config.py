import logging

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    database_url: str = "sqlite:///userbase.db"
    host: str = "0.0.0.0"
    port: int = 5500
    log_level: str = "INFO"
    auto_migrate: bool = True
    cors_origins: list[str] = ["*"]

    class Config:
        env_prefix = "USERBASE_"
        env_file = ".env"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


settings = Settings()
