"""
Destino - Application Settings

Loads configuration from environment variables using Pydantic Settings.
On Streamlit Cloud, bridges st.secrets into env vars so Pydantic can read them.
"""

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from src.engine.validators import DEFAULT_OPTIONS, MAX_OPTIONS, MIN_OPTIONS

_SECRET_KEYS = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "DEBUG",
    "LOG_LEVEL",
    "SETTLE_DELAY_MS",
    "DEFAULT_OPTION_COUNT",
)


def _load_streamlit_secrets() -> None:
    """Bridge Streamlit Cloud secrets into environment variables."""
    try:
        import streamlit as st

        for key in _SECRET_KEYS:
            if key not in os.environ and key in st.secrets:
                os.environ[key] = str(st.secrets[key])
    except Exception:
        # No secrets file outside Streamlit
        pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    supabase_url: str
    supabase_anon_key: str

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Game
    settle_delay_ms: int = Field(default=500, ge=0)
    default_option_count: int = Field(
        default=DEFAULT_OPTIONS, ge=MIN_OPTIONS, le=MAX_OPTIONS
    )
    anonymous_player_name: str = "Anônimo"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    _load_streamlit_secrets()
    return Settings()
