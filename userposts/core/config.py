from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Configurações básicas
    PROJECT_NAME: str = "User Posts API"
    VERSION: str = "1.0.0"

    # Servidor
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Banco de dados: DATABASE_URL tem prioridade sobre as partes DB_*
    DATABASE_URL: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: Optional[str] = None

    # Celery
    CELERY_BROKER_URL: str = "pyamqp://guest@localhost//"

    class Config:
        case_sensitive = True
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_NAME:
            return URL.create(
                "postgresql+psycopg2",
                username=self.DB_USER,
                password=self.DB_PASSWORD,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            ).render_as_string(hide_password=False)
        return "sqlite:///./userposts.db"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
