from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    store_backend: str = "memory"
    database_url: str = "sqlite:///./blocktix.db"
    auto_seed_sample_events: bool = True

    admin_api_key: str = ""
    secret_key: str = "dev-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_days: int = 7

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from: str = ""

    otp_ttl_seconds: int = 600

    cors_origins: list[str] = ["*"]
    allowed_hosts: list[str] = ["*"]
    rate_limit_enabled: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def email_configured(self) -> bool:
        return bool(
            self.smtp_host and self.smtp_port and self.smtp_user
            and self.smtp_password and self.smtp_from
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
