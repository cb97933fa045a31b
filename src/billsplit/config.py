from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    base_fee_cents: int = Field(0, ge=0, alias="BILLSPLIT_BASE_FEE_CENTS")
    ai_cents: int = Field(0, ge=0, alias="BILLSPLIT_AI_CENTS")
    raw_decimals: int = Field(6, ge=0, alias="BILLSPLIT_RAW_DECIMALS")
    locale: str = Field("pt_BR", alias="BILLSPLIT_LOCALE")
    currency: str = Field("BRL", alias="BILLSPLIT_CURRENCY")
    log_level: str = Field("INFO", alias="BILLSPLIT_LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
