from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # .env is loaded by hand in get_settings() so a missing file never breaks tests or containers.
    model_config = SettingsConfigDict(extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    allowed_origins: str = "*"

    # "memory" keeps everything in-process; "aws" talks to S3 and DynamoDB.
    storage_backend: Literal["memory", "aws"] = "memory"
    aws_region: str = "us-west-2"
    aws_endpoint_url: str | None = None
    bucket_name: str = "phonebook-source-bucket"
    table_name: str = "phonebook-table"
    blob_name: str = "input.txt"

    source_url: str = "https://s3-us-west-2.amazonaws.com/css490/input.txt"
    server_url: str = "http://localhost:8000"
    http_timeout_s: float = 25.0

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    try:
        from dotenv import load_dotenv

        load_dotenv(".env", override=False)
    except Exception:
        pass
    return Settings()
