import json
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings


def parse_cors_origins(v: Any) -> list[str]:
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in v.split(",") if origin.strip()]
    return []


class Settings(BaseSettings):
    database_url: str = "sqlite:///./mentorhub.db"
    jwt_secret: str = "change_me_in_production"
    token_expire_minutes: int = 60 * 24
    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = False
    cors_origins: list[str] | str = ["*"]

    # Client side
    api_base_url: str = "http://localhost:8000"
    session_file: str = "~/.mentorhub/session.json"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v: Any) -> list[str]:
        return parse_cors_origins(v)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
