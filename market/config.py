import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
import pytz

# Find .env even in frozen or packaged mode
POSSIBLE_ENV_PATHS = [
    Path(__file__).resolve().parent.parent / ".env",        # normal
    Path(sys.executable).resolve().parent / ".env",         # frozen exe
    Path.cwd() / ".env",                                   # runtime cwd
]

for env_path in POSSIBLE_ENV_PATHS:
    if env_path.exists():
        load_dotenv(env_path, override=True)
        break


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str | None = None
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: str = "5432"
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_NAME: str = ""
    DATABASE_ISOLATION_LEVEL: str = "READ COMMITTED"

    # Requests
    REQUEST_TIMEOUT: float = 5.0
    DEFAULT_LIMIT: int = 10
    BUSINESS_RULE_STATUS: int = 409

    TIMEZONE: str = "Asia/Tashkent"

    # Logging
    LOG_FILE: str = "market.log"
    LOG_LEVEL: str = "DEBUG"
    LOG_ROTATION: str = "500 MB"

    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8080

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DATABASE_NAME:
            return (
                f"postgresql+psycopg2://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
                f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
            )
        return "sqlite:///./market.db"

    @property
    def tz(self):
        return pytz.timezone(self.TIMEZONE)


settings = Settings()
