import logging
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    google_api_key: Optional[str] = None
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    max_file_size_mb: int = 20
    image_model_name: str = "gemini/gemini-1.5-flash"
    pdf_model_name: str = "gemini/gemini-1.5-pro"
    model_temperature: float = 0.0
    model_max_tokens: int = 2048
    model_timeout_seconds: Optional[float] = None
    cors_origins: List[str] = ["https://check-post-webapp-tzw3.vercel.app"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        protected_namespaces = ()

settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
