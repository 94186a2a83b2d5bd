"""
Unit tests for the player service layer (transactions and rule enforcement).
"""

import pytest

from player_api.crud import ReadData
from player_api.domain.exceptions import InvalidPlayerInputError, PlayerNotFoundError
from player_api.models.dc_models import PlayerFilterModel, PlayerModel
from player_api.services import player_db


class TestPlayerService:
    @pytest.mark.crud
    async def test_create_assigns_id_and_progress(self, test_db, player_payload):
        created = await player_db.create_player(PlayerModel(**player_payload), test_db)

        assert created.id > 0
        assert created.level == 1
        assert created.until_next_level == 200
        assert created.banned is False

    @pytest.mark.crud
    async def test_create_rejects_before_writing(self, test_db, player_payload):
        player_payload["name"] = "N" * 13
        with pytest.raises(InvalidPlayerInputError):
            await player_db.create_player(PlayerModel(**player_payload), test_db)

        assert await player_db.count_players(PlayerFilterModel(), test_db) == 0

    @pytest.mark.crud
    async def test_update_without_fields_changes_nothing(self, test_db, roster):
        legolas = roster[2]

        result = await player_db.update_player(str(legolas.id), PlayerModel(), test_db)

        assert result == legolas
        assert result.banned is True

    @pytest.mark.crud
    async def test_update_without_banned_lifts_ban(self, test_db, roster):
        legolas = roster[2]

        result = await player_db.update_player(str(legolas.id), PlayerModel(experience=100), test_db)

        assert result.banned is False
        assert (result.level, result.until_next_level) == (1, 200)
        assert result.name == legolas.name

    @pytest.mark.crud
    async def test_invalid_update_leaves_player_untouched(self, test_db, roster):
        with pytest.raises(InvalidPlayerInputError):
            await player_db.update_player(str(roster[0].id), PlayerModel(name="", experience=5), test_db)

        stored = await ReadData.find_by_id(roster[0].id, test_db)
        assert stored.experience == roster[0].experience

    @pytest.mark.crud
    async def test_unknown_ids(self, test_db, roster):
        with pytest.raises(PlayerNotFoundError):
            await player_db.read_player("999999", test_db)
        with pytest.raises(PlayerNotFoundError):
            await player_db.update_player("999999", PlayerModel(name="Bob"), test_db)
        with pytest.raises(PlayerNotFoundError):
            await player_db.delete_player("999999", test_db)
        with pytest.raises(InvalidPlayerInputError):
            await player_db.delete_player("abc", test_db)

    @pytest.mark.crud
    async def test_seed_only_fills_an_empty_table(self, test_db):
        inserted = await player_db.seed_default_players(test_db)

        assert inserted == len(player_db.DEFAULT_PLAYERS)
        assert await player_db.seed_default_players(test_db) == 0
        assert await player_db.count_players(PlayerFilterModel(), test_db) == inserted
