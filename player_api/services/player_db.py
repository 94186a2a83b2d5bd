"""DB service layer for player use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns the transaction boundary: it validates first, then lets
  the CRUD helpers flush, then commits once.
- Rule violations surface as domain exceptions (see domain.exceptions).
"""

import logging
from typing import List

from sqlalchemy import true
from sqlalchemy.ext.asyncio import AsyncSession

from player_api.converter import DataConverter
from player_api.crud import CreateData, DeleteData, ReadData
from player_api.domain.exceptions import PlayerNotFoundError
from player_api.domain.player_rules import (
    has_changes,
    parse_player_id,
    validate_new_player,
    validate_player_changes,
)
from player_api.filters import compose_player_predicate
from player_api.models.dc_models import PageModel, PlayerFilterModel, PlayerModel, Profession, Race
from player_api.models.schema_models import PlayerSchema

data_converter = DataConverter()

# 2010-01-01, 2005-06-15, 2012-03-20 (UTC)
DEFAULT_PLAYERS = [
    PlayerModel(
        name="Ragnar", title="Keeper of the North Gate", race=Race.HUMAN,
        profession=Profession.WARRIOR, birthday=1262304000000, experience=58347,
    ),
    PlayerModel(
        name="Elandriel", title="Voice of the Silver Grove", race=Race.ELF,
        profession=Profession.DRUID, birthday=1118793600000, experience=174203,
    ),
    PlayerModel(
        name="Grimbold", title="Hammer of Deep Halls", race=Race.DWARF,
        profession=Profession.CLERIC, birthday=1332201600000, experience=804, banned=True,
    ),
]


async def read_player(raw_id: str, session: AsyncSession) -> PlayerSchema:
    player_id = parse_player_id(raw_id)
    player = await ReadData.find_by_id(player_id, session)
    if player is None:
        raise PlayerNotFoundError(player_id)
    return data_converter.convert_player_to_schema(player)


async def list_players(
    player_filter: PlayerFilterModel, page: PageModel, session: AsyncSession
) -> List[PlayerSchema]:
    predicate = compose_player_predicate(player_filter)
    players = await ReadData.find_all_matching(
        predicate, page.order, page.page_number, page.page_size, session
    )
    return [data_converter.convert_player_to_schema(player) for player in players]


async def count_players(player_filter: PlayerFilterModel, session: AsyncSession) -> int:
    return await ReadData.count_matching(compose_player_predicate(player_filter), session)


async def create_player(payload: PlayerModel, session: AsyncSession) -> PlayerSchema:
    """Validate and store a new player.

    Raises:
        InvalidPlayerInputError: a required field is missing or out of range
    """
    fields = payload.present_fields()
    validate_new_player(fields)

    player = data_converter.convert_model_to_player(fields)
    await CreateData.save(player, session)
    await session.commit()
    logging.info(f"Created player {player.id} ({player.name}, level {player.level})")
    return data_converter.convert_player_to_schema(player)


async def update_player(raw_id: str, payload: PlayerModel, session: AsyncSession) -> PlayerSchema:
    """Apply a partial update to a stored player.

    An update without any settable field returns the stored player untouched.
    Otherwise a missing ``banned`` resets the flag to False.

    Raises:
        InvalidPlayerInputError: malformed id or out-of-range value
        PlayerNotFoundError: no player with this id
    """
    player_id = parse_player_id(raw_id)
    player = await ReadData.find_by_id(player_id, session)
    if player is None:
        raise PlayerNotFoundError(player_id)

    changes = payload.present_fields()
    if not has_changes(changes):
        return data_converter.convert_player_to_schema(player)

    validate_player_changes(changes)
    data_converter.apply_changes_to_player(player, changes)
    await CreateData.save(player, session)
    await session.commit()
    logging.info(f"Updated player {player.id}: {sorted(changes)}")
    return data_converter.convert_player_to_schema(player)


async def delete_player(raw_id: str, session: AsyncSession) -> None:
    """Remove a stored player.

    Raises:
        InvalidPlayerInputError: malformed id
        PlayerNotFoundError: no player with this id
    """
    player_id = parse_player_id(raw_id)
    if not await ReadData.exists_by_id(player_id, session):
        raise PlayerNotFoundError(player_id)

    await DeleteData.delete_by_id(player_id, session)
    await session.commit()
    logging.info(f"Deleted player {player_id}")


async def seed_default_players(session: AsyncSession) -> int:
    """Insert the default roster when no player is stored yet.

    Returns:
        int: Number of players inserted
    """
    if await ReadData.count_matching(true(), session) > 0:
        return 0
    for payload in DEFAULT_PLAYERS:
        fields = payload.present_fields()
        validate_new_player(fields)
        await CreateData.save(data_converter.convert_model_to_player(fields), session)
    await session.commit()
    logging.info(f"Seeded {len(DEFAULT_PLAYERS)} default players")
    return len(DEFAULT_PLAYERS)
