from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
    # App
    environment: str = "development"
    log_level: str = "INFO"
    extra_allowed_origins: str = ""
    host: str = "0.0.0.0"
    port: int = 8000
    # Share links
    share_base_url: str = "https://jobrun.app"   # Origin of the public viewer
    default_business_name: str = "our company"
    # Viewer
    brand_name: str = "JobRun"
    currency_symbol: str = "$"
    # Rate limiting
    rate_limit_per_minute: int = 30
    # Only honour X-Forwarded-For when the app sits behind a proxy that sets it
    trust_forwarded_for: bool = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
