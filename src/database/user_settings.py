"""
Destino - Settings Managers

CRUD operations for the `user_settings` and `app_settings` tables.
"""

from supabase import Client

from src.database.models import AppSetting, UserProfile
from src.engine.mash import MAX_MARRIAGE_AGE, MIN_PLAYER_AGE
from src.engine.validators import validate_player_age

CURRENT_PROFILE_ID = "current"
DEFAULT_PLAYER_NAME = "Anônimo"


class UserSettingsManager:
    """Manages the player's profile (name and age) in Supabase."""

    def __init__(self, client: Client, profile_id: str = CURRENT_PROFILE_ID) -> None:
        self.client = client
        self.table = client.table("user_settings")
        self.profile_id = profile_id

    def get(self) -> UserProfile | None:
        """Get the stored profile, if any."""
        data = (
            self.table
            .select("*")
            .eq("id", self.profile_id)
            .execute()
        )
        if data.data:
            return UserProfile.model_validate(data.data[0])
        return None

    def save(
        self,
        player_name: str,
        player_age: int,
        anonymous_name: str = DEFAULT_PLAYER_NAME,
    ) -> UserProfile:
        """Store the profile. A blank name saves the player as anonymous.

        Raises:
            ValueError: If the age is outside the playable range
        """
        validate_player_age(player_age, MIN_PLAYER_AGE, MAX_MARRIAGE_AGE)
        name = player_name.strip()
        is_anonymous = not name
        data = (
            self.table
            .upsert({
                "id": self.profile_id,
                "player_name": name or anonymous_name,
                "player_age": player_age,
                "is_anonymous": is_anonymous,
            })
            .execute()
        )
        return UserProfile.model_validate(data.data[0])

    def clear(self) -> None:
        """Forget the stored profile."""
        self.table.delete().eq("id", self.profile_id).execute()

    def display_name(self, anonymous_name: str = DEFAULT_PLAYER_NAME) -> str:
        """Name to record with a finished game."""
        profile = self.get()
        if profile is None or not profile.player_name:
            return anonymous_name
        return profile.player_name


class AppSettingsManager:
    """Key/value application settings in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("app_settings")

    def get(self, key: str) -> str | None:
        """Get a setting value."""
        data = (
            self.table
            .select("*")
            .eq("id", key)
            .execute()
        )
        if data.data:
            return AppSetting.model_validate(data.data[0]).value
        return None

    def set(self, key: str, value: str) -> AppSetting:
        """Create or replace a setting."""
        data = (
            self.table
            .upsert({"id": key, "value": value})
            .execute()
        )
        return AppSetting.model_validate(data.data[0])
