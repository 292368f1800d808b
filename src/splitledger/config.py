from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    database_url: Optional[str] = Field(None, alias="DATABASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    strict_invariants: bool = Field(False, alias="LEDGER_STRICT_INVARIANTS")
    strict_membership: bool = Field(False, alias="LEDGER_STRICT_MEMBERSHIP")
    currency_symbol: str = Field("$", alias="CURRENCY_SYMBOL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
