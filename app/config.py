# app/config.py
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Product API"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    # comma-separated, "*" for any origin
    cors_origins: str = "*"
    seed_products: bool = True

    # "marker" only checks for the Bearer prefix, "jwt" verifies a signed token
    auth_mode: str = "marker"
    auth_secret_key: str = ""
    auth_algorithm: str = "HS256"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
