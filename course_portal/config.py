from typing import Any, Dict, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./courseenrollment.db"
    DATABASE_ECHO: bool = False


class JWTSettings(BaseSettings):
    JWT_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12


class AppSettings(DatabaseSettings, JWTSettings):
    ALLOWED_ORIGINS: str = ""

    model_config = SettingsConfigDict(env_file="./.env", extra="allow")

    @property
    def allowed_origins(self) -> List[str]:
        origins = [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]
        return [origin for origin in origins if origin]


class LogConfig(BaseSettings):
    LOGGER_NAME: str = "course_portal"
    LOG_FORMAT: str = "%(levelprefix)s | %(asctime)s | %(message)s"
    LOG_LEVEL: str = "INFO"

    version: int = 1
    disable_existing_loggers: bool = False
    formatters: Dict[str, Any] = {
        "default": {
            "()": "uvicorn.logging.DefaultFormatter",
            "fmt": LOG_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    }
    handlers: Dict[str, Any] = {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
    }
    loggers: Dict[str, Any] = {}

    def model_post_init(self, __context: Any) -> None:
        self.loggers = {
            self.LOGGER_NAME: {"handlers": ["default"], "level": self.LOG_LEVEL},
        }


config = AppSettings()
