from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, delete, func
from typing import List
import logging

from player_api.filters import Clause, build_order_by
from player_api.models.dc_models import PlayerOrder
from player_api.models.schemas import Player

# These helpers never commit: the service layer owns the transaction.


class ReadData:
    @staticmethod
    async def find_by_id(player_id: int, session: AsyncSession) -> Player | None:
        """Read one player from database

        Args:
            player_id (int): To identify the player

        Returns:
            Player | None: Stored player, or None when the id is unknown
        """
        try:
            return await session.get(Player, player_id)
        except SQLAlchemyError as e:
            logging.error(f"Failed to read player data: {e}")
            raise

    @staticmethod
    async def exists_by_id(player_id: int, session: AsyncSession) -> bool:
        """Check whether a player with this id is stored"""
        try:
            stmt = select(Player.id).where(Player.id == player_id)
            result = await session.execute(stmt)
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            logging.error(f"Failed to check player existence: {e}")
            raise

    @staticmethod
    async def find_all_matching(
        predicate: Clause,
        order: PlayerOrder,
        page_number: int,
        page_size: int,
        session: AsyncSession,
    ) -> List[Player]:
        """Read one page of players matching the predicate

        Args:
            predicate (Clause): Combined filter built by the filter composer
            order (PlayerOrder): Ascending sort key
            page_number (int): Zero-based page index
            page_size (int): Number of players per page

        Returns:
            List[Player]: Players of the requested page only
        """
        try:
            stmt = (
                select(Player)
                .where(predicate)
                .order_by(*build_order_by(order))
                .offset(page_number * page_size)
                .limit(page_size)
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logging.error(f"Failed to read player list: {e}")
            raise

    @staticmethod
    async def count_matching(predicate: Clause, session: AsyncSession) -> int:
        """Count every player matching the predicate, ignoring pagination"""
        try:
            stmt = select(func.count()).select_from(Player).where(predicate)
            result = await session.execute(stmt)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logging.error(f"Failed to count players: {e}")
            raise


class CreateData:
    @staticmethod
    async def save(player: Player, session: AsyncSession) -> Player:
        """Insert a new player or flush changes of a stored one

        Args:
            player (Player): New (id assigned on flush) or already stored player

        Returns:
            Player: The same row, with its id populated
        """
        try:
            session.add(player)
            await session.flush()
            return player
        except SQLAlchemyError as e:
            logging.error(f"Failed to save player data: {e}")
            await session.rollback()
            raise


class DeleteData:
    @staticmethod
    async def delete_by_id(player_id: int, session: AsyncSession) -> None:
        """Delete the player with this id

        Args:
            player_id (int): To identify the player
        """
        try:
            await session.execute(delete(Player).where(Player.id == player_id))
        except SQLAlchemyError as e:
            logging.error(f"Failed to delete player data: {e}")
            await session.rollback()
            raise
