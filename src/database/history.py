"""
Destino - Game History Manager

CRUD operations for the `games` table.
"""

import logging

from supabase import Client

from src.database.models import GameRecord
from src.engine.base import FinalResult

logger = logging.getLogger(__name__)


class GameHistoryManager:
    """Stores finished destinies in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("games")

    def save_result(
        self,
        result: FinalResult,
        cycle_number: int,
        player_name: str,
    ) -> GameRecord:
        """Record a finished game."""
        data = (
            self.table
            .insert({
                **result.to_dict(),
                "cycle_number": cycle_number,
                "player_name": player_name,
            })
            .execute()
        )
        record = GameRecord.model_validate(data.data[0])
        logger.info("Saved game %s for %s", record.id, player_name)
        return record

    def list_history(self, limit: int | None = None) -> list[GameRecord]:
        """Get saved games, most recent first."""
        query = self.table.select("*").order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        data = query.execute()
        return [GameRecord.model_validate(row) for row in data.data]

    def clear(self) -> None:
        """Delete every saved game."""
        self.table.delete().gte("id", 0).execute()
        logger.info("Cleared game history")
