import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_env: str
    log_level: str

    analyzer_base_url: str
    analyzer_api_key: str
    analyzer_model: str
    analyzer_timeout: float
    analyzer_cache_size: int

    duplicate_threshold: float
    containment_score: float
    cors_origins: list[str]

    @staticmethod
    def load() -> "Settings":
        cors_origins_raw: str = os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ).strip()
        cors_origins: list[str] = [
            origin.strip() for origin in cors_origins_raw.split(",") if origin.strip()
        ]
        return Settings(
            app_name=os.getenv("APP_NAME", "codelens").strip(),
            app_env=os.getenv("APP_ENV", "dev").strip(),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip(),

            analyzer_base_url=os.getenv("ANALYZER_BASE_URL", "").strip(),
            analyzer_api_key=os.getenv("ANALYZER_API_KEY", "").strip(),
            analyzer_model=os.getenv("ANALYZER_MODEL", "gemini-2.5-flash").strip(),
            analyzer_timeout=float(os.getenv("ANALYZER_TIMEOUT", "180").strip()),
            analyzer_cache_size=int(os.getenv("ANALYZER_CACHE_SIZE", "256").strip()),

            duplicate_threshold=float(os.getenv("REVIEW_DUPLICATE_THRESHOLD", "0.7").strip()),
            containment_score=float(os.getenv("REVIEW_CONTAINMENT_SCORE", "0.8").strip()),
            cors_origins=cors_origins,
        )


settings: Settings = Settings.load()
