from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    DB_FILE: str
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
