"""
Destino - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.engine.base import WealthCode

_WEALTH_CODES = frozenset(code.value for code in WealthCode)


class GameRecord(BaseModel):
    """Mirrors the `games` table: one finished destiny."""

    id: int
    player_name: str = Field(max_length=60)
    profession: str
    children: int = Field(ge=1)
    partner: str
    wealth: str
    cycle_number: int = Field(ge=1)
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("wealth")
    @classmethod
    def _check_wealth(cls, value: str) -> str:
        if value not in _WEALTH_CODES:
            raise ValueError(f"Wealth must be one of {sorted(_WEALTH_CODES)}, got {value!r}")
        return value


class UserProfile(BaseModel):
    """Mirrors the `user_settings` table."""

    id: str = "current"
    player_name: str = Field(max_length=60)
    player_age: int = Field(default=0, ge=0)
    is_anonymous: bool = True

    model_config = {"from_attributes": True}


class AppSetting(BaseModel):
    """Mirrors the `app_settings` table (free-form key/value pairs)."""

    id: str
    value: str

    model_config = {"from_attributes": True}
