"""Configuration management using pydantic-settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Optional

BUNDLED_RULESET_PATH = Path(__file__).parent / "rules" / "effective_tld_names.dat"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )
    
    # Ruleset source (url wins over path when set)
    ruleset_path: str = str(BUNDLED_RULESET_PATH)
    ruleset_url: Optional[str] = None
    
    # Timeouts (seconds)
    ruleset_fetch_timeout_seconds: int = 10
    
    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    
    # Logging
    log_level: str = "INFO"


settings = Settings()
