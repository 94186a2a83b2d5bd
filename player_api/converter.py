from datetime import datetime, timedelta
from typing import Mapping

from player_api.domain.player_rules import EPOCH, derive_progress
from player_api.models.schema_models import PlayerSchema
from player_api.models.schemas import Player

MILLISECOND = timedelta(milliseconds=1)


class DataConverter:
    """This class is used to convert data between different formats."""

    @staticmethod
    def millis_to_datetime(millis: int) -> datetime:
        """Convert epoch milliseconds to a naive UTC datetime

        Args:
            millis (int): Milliseconds since 1970-01-01T00:00:00Z

        Returns:
            datetime: Naive datetime in UTC, as stored in the database
        """
        return EPOCH + timedelta(milliseconds=millis)

    @staticmethod
    def datetime_to_millis(value: datetime) -> int:
        """Convert a naive UTC datetime back to epoch milliseconds"""
        return (value - EPOCH) // MILLISECOND

    def convert_model_to_player(self, fields: Mapping) -> Player:
        """Build a new Player row from a validated create payload

        Args:
            fields (Mapping): Present payload fields; all required ones are set

        Returns:
            Player: Transient row with derived level fields and no id
        """
        level, until_next_level = derive_progress(fields["experience"])
        return Player(
            name=fields["name"],
            title=fields["title"],
            race=fields["race"],
            profession=fields["profession"],
            birthday=self.millis_to_datetime(fields["birthday"]),
            banned=bool(fields.get("banned", False)),
            experience=fields["experience"],
            level=level,
            until_next_level=until_next_level,
        )

    def apply_changes_to_player(self, player: Player, changes: Mapping) -> Player:
        """Copy the present update fields onto a stored row

        A missing ``banned`` resets the flag to False. Level fields are
        recomputed from the resulting experience.
        """
        for field in ("name", "title", "race", "profession", "experience"):
            if changes.get(field) is not None:
                setattr(player, field, changes[field])
        if changes.get("birthday") is not None:
            player.birthday = self.millis_to_datetime(changes["birthday"])
        player.banned = bool(changes.get("banned", False))

        player.level, player.until_next_level = derive_progress(player.experience)
        return player

    def convert_player_to_schema(self, player: Player) -> PlayerSchema:
        """Convert a Player row to the response schema with birthday in milliseconds"""
        return PlayerSchema(
            id=player.id,
            name=player.name,
            title=player.title,
            race=player.race,
            profession=player.profession,
            birthday=self.datetime_to_millis(player.birthday),
            banned=player.banned,
            experience=player.experience,
            level=player.level,
            until_next_level=player.until_next_level,
        )
