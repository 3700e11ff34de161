from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="DocID Classifier", alias="APP_NAME")
    app_env: str = Field(default="local", alias="APP_ENV")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    suite_manifest: str = Field(default="config/suites.yaml", alias="SUITE_MANIFEST")
    suite_max_workers: int = Field(default=4, alias="SUITE_MAX_WORKERS", ge=1)
    redact_document_numbers: bool = Field(default=True, alias="REDACT_DOCUMENT_NUMBERS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
