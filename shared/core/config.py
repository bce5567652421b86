import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 1440))  # 24 hours default

    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT")
    RESERVATION_DB_NAME: str | None = os.getenv("RESERVATION_DB_NAME")
    DB_SSLMODE: str = os.getenv("DB_SSLMODE", "require")
    # Full URL override (local sqlite runs, tests)
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")

    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8002")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Booking rules
    MAX_ROOMS_PER_BOOKING: int = int(os.getenv("MAX_ROOMS_PER_BOOKING", 5))
    MAX_STAY_NIGHTS: int = int(os.getenv("MAX_STAY_NIGHTS", 30))
    COMMIT_MAX_ATTEMPTS: int = int(os.getenv("COMMIT_MAX_ATTEMPTS", 3))
    COMMIT_BACKOFF_SECONDS: float = float(
        os.getenv("COMMIT_BACKOFF_SECONDS", 0.05))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

if settings.DATABASE_URL:
    RESERVATION_DATABASE_URL = settings.DATABASE_URL
else:
    RESERVATION_DATABASE_URL = (
        f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.RESERVATION_DB_NAME}?sslmode={settings.DB_SSLMODE}"
    )
