"""
Destino Database Layer.

Supabase integration for game history and player settings.
"""

from src.database.client import get_supabase_client
from src.database.history import GameHistoryManager
from src.database.models import AppSetting, GameRecord, UserProfile
from src.database.user_settings import AppSettingsManager, UserSettingsManager

__all__ = [
    "get_supabase_client",
    "AppSetting",
    "AppSettingsManager",
    "GameHistoryManager",
    "GameRecord",
    "UserProfile",
    "UserSettingsManager",
]
