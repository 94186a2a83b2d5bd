import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from player_api.db import get_session
from player_api.domain.exceptions import PlayerError, PlayerNotFoundError
from player_api.models.dc_models import (
    PageModel,
    PlayerFilterModel,
    PlayerModel,
    PlayerOrder,
    Profession,
    Race,
)
from player_api.models.schema_models import PlayerSchema
from player_api.services import player_db

player_router = APIRouter(prefix="/rest/players", tags=["players"])

# Numeric filters are bounded like 32-bit and 64-bit integers
INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1


def to_http_exception(error: PlayerError) -> HTTPException:
    """Map a player rule violation to the matching HTTP status"""
    if isinstance(error, PlayerNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)


def player_filter_params(
    name: Optional[str] = None,
    title: Optional[str] = None,
    race: Optional[Race] = None,
    profession: Optional[Profession] = None,
    after: Optional[int] = Query(default=None, ge=LONG_MIN, le=LONG_MAX),
    before: Optional[int] = Query(default=None, ge=LONG_MIN, le=LONG_MAX),
    banned: Optional[bool] = None,
    min_experience: Optional[int] = Query(default=None, alias="minExperience", ge=INT_MIN, le=INT_MAX),
    max_experience: Optional[int] = Query(default=None, alias="maxExperience", ge=INT_MIN, le=INT_MAX),
    min_level: Optional[int] = Query(default=None, alias="minLevel", ge=INT_MIN, le=INT_MAX),
    max_level: Optional[int] = Query(default=None, alias="maxLevel", ge=INT_MIN, le=INT_MAX),
) -> PlayerFilterModel:
    return PlayerFilterModel(
        name=name,
        title=title,
        race=race,
        profession=profession,
        after=after,
        before=before,
        banned=banned,
        min_experience=min_experience,
        max_experience=max_experience,
        min_level=min_level,
        max_level=max_level,
    )


def page_params(
    order: PlayerOrder = PlayerOrder.ID,
    page_number: int = Query(default=0, ge=0, le=INT_MAX, alias="pageNumber"),
    page_size: int = Query(default=3, ge=1, le=INT_MAX, alias="pageSize"),
) -> PageModel:
    return PageModel(order=order, page_number=page_number, page_size=page_size)


class PlayerAPI:
    @staticmethod
    @player_router.get("", response_model=List[PlayerSchema])
    async def get_players(
        player_filter: PlayerFilterModel = Depends(player_filter_params),
        page: PageModel = Depends(page_params),
        session: AsyncSession = Depends(get_session),
    ):
        return await player_db.list_players(player_filter, page, session)

    @staticmethod
    @player_router.get("/count", response_model=int)
    async def get_players_count(
        player_filter: PlayerFilterModel = Depends(player_filter_params),
        session: AsyncSession = Depends(get_session),
    ):
        return await player_db.count_players(player_filter, session)

    @staticmethod
    @player_router.post("", response_model=PlayerSchema)
    async def create_player(
        player: PlayerModel,
        session: AsyncSession = Depends(get_session),
    ):
        try:
            return await player_db.create_player(player, session)
        except PlayerError as e:
            logging.info(f"Rejected player creation: {e.message}")
            raise to_http_exception(e)

    @staticmethod
    @player_router.get("/{player_id}", response_model=PlayerSchema)
    async def get_player(player_id: str, session: AsyncSession = Depends(get_session)):
        try:
            return await player_db.read_player(player_id, session)
        except PlayerError as e:
            raise to_http_exception(e)

    @staticmethod
    @player_router.post("/{player_id}", response_model=PlayerSchema)
    async def update_player(
        player_id: str,
        player: Optional[PlayerModel] = Body(default=None),
        session: AsyncSession = Depends(get_session),
    ):
        try:
            return await player_db.update_player(player_id, player or PlayerModel(), session)
        except PlayerError as e:
            logging.info(f"Rejected update of player {player_id}: {e.message}")
            raise to_http_exception(e)

    @staticmethod
    @player_router.delete("/{player_id}")
    async def delete_player(player_id: str, session: AsyncSession = Depends(get_session)):
        try:
            await player_db.delete_player(player_id, session)
        except PlayerError as e:
            raise to_http_exception(e)
        return Response(status_code=status.HTTP_200_OK)
