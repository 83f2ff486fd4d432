from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 30
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5500
    FRONTEND_ORIGINS: List[str] = ["http://localhost:5500"]
    STATIC_DIR: str = "public"
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
