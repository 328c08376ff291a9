# daily_report/core/config.py
from pydantic_settings import BaseSettings; from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./daily_report.db"
    JWT_SECRET_KEY: str = "change-me"; JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    AUTH_COOKIE_NAME: str = "token"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENV.strip().lower() in ("prod", "production")


settings = Settings()
