from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    secret_key: str
    database_url: str
    jwt_issuer: str = "requisition-system"
    jwt_audience: str = "requisition-system-clients"
    access_token_expire_minutes: int = 60
    backend_cors_origins: str = "*"
    sql_echo: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.backend_cors_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
