from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    bot_token: Optional[str] = Field(None, alias="BOT_TOKEN")
    currency_symbol: str = Field("$", alias="CURRENCY_SYMBOL")
    settle_tolerance: Decimal = Field(Decimal("0.01"), alias="SETTLE_TOLERANCE", gt=0)
    split_policy: Literal["tolerate", "reject"] = Field("tolerate", alias="SPLIT_POLICY")
    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
