"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # SMS gateway (MagicText)
    sms_api_key: str = ""
    sms_sender_id: str = "TOPIKO"
    sms_gateway_url: str = "http://msg.magictext.in/V2/http-api-post.php"
    sms_timeout: float = 15.0

    # OTP message
    otp_brand: str = "Topiko"
    otp_support_phone: str = "885 886 8889"
    otp_length: int = Field(default=4, ge=4, le=8)

    # Analytics store (Supabase)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_timeout: float = 10.0

    # Scoring rule table override (JSON file)
    rules_path: Path | None = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @property
    def sms_configured(self) -> bool:
        return bool(self.sms_api_key)

    @property
    def analytics_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)
