"""Configuration management using Pydantic Settings"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Airtime provider
    api_key: Optional[str] = None
    provider_url: str = "https://maskawasub.com/api/topup/"

    # Admin channel
    admin_phone: Optional[str] = None
    admin_pin: Optional[str] = None

    # Admission policy at boot (process-lifetime only)
    default_claim_limit: int = 50
    site_online: bool = True

    # Service
    service_name: str = "airtime-gateway"
    log_level: str = "INFO"
    cors_origins: str = "*"  # comma-separated, e.g. https://a.ng,https://b.ng

    # HTTP Client
    http_timeout_seconds: float = 15.0

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
