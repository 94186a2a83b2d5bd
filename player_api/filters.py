"""Query composition for the player list and count endpoints.

Every filter_by_* function returns a SQLAlchemy boolean clause, or None when
its parameters are absent. Active clauses are AND-combined; there is no OR.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from player_api.converter import DataConverter
from player_api.models.dc_models import PlayerFilterModel, PlayerOrder, Profession, Race
from player_api.models.schemas import Player

Clause = ColumnElement[bool]


def _range_clause(column, low, high) -> Optional[Clause]:
    if low is None and high is None:
        return None
    if low is None:
        return column <= high
    if high is None:
        return column >= low
    return column.between(low, high)


def filter_by_name(name: Optional[str]) -> Optional[Clause]:
    if name is None:
        return None
    return Player.name.contains(name, autoescape=True)


def filter_by_title(title: Optional[str]) -> Optional[Clause]:
    if title is None:
        return None
    return Player.title.contains(title, autoescape=True)


def filter_by_race(race: Optional[Race]) -> Optional[Clause]:
    if race is None:
        return None
    return Player.race == race


def filter_by_profession(profession: Optional[Profession]) -> Optional[Clause]:
    if profession is None:
        return None
    return Player.profession == profession


def _birthday_bound(millis: Optional[int]) -> Optional[datetime]:
    # Bounds past the datetime range (years 1-9999) clamp to its ends.
    if millis is None:
        return None
    try:
        return DataConverter.millis_to_datetime(millis)
    except OverflowError:
        return datetime.max if millis > 0 else datetime.min


def filter_by_birthday(after: Optional[int], before: Optional[int]) -> Optional[Clause]:
    """Inclusive birthday range, bounds given in epoch milliseconds."""
    return _range_clause(Player.birthday, _birthday_bound(after), _birthday_bound(before))


def filter_by_banned(banned: Optional[bool]) -> Optional[Clause]:
    if banned is None:
        return None
    return Player.banned.is_(True) if banned else Player.banned.is_(False)


def filter_by_experience(min_experience: Optional[int], max_experience: Optional[int]) -> Optional[Clause]:
    return _range_clause(Player.experience, min_experience, max_experience)


def filter_by_level(min_level: Optional[int], max_level: Optional[int]) -> Optional[Clause]:
    return _range_clause(Player.level, min_level, max_level)


def build_player_filters(player_filter: PlayerFilterModel) -> List[Clause]:
    """Return the clauses contributed by the parameters that are present."""
    clauses = [
        filter_by_name(player_filter.name),
        filter_by_title(player_filter.title),
        filter_by_race(player_filter.race),
        filter_by_profession(player_filter.profession),
        filter_by_birthday(player_filter.after, player_filter.before),
        filter_by_banned(player_filter.banned),
        filter_by_experience(player_filter.min_experience, player_filter.max_experience),
        filter_by_level(player_filter.min_level, player_filter.max_level),
    ]
    return [clause for clause in clauses if clause is not None]


def compose_player_predicate(player_filter: PlayerFilterModel) -> Clause:
    """AND of all active filters; matches every player when none is active."""
    clauses = build_player_filters(player_filter)
    if not clauses:
        return true()
    return and_(*clauses)


def build_order_by(order: PlayerOrder) -> list:
    """Ascending order on the requested key, id breaks ties."""
    if order is PlayerOrder.ID:
        return [Player.id.asc()]
    return [getattr(Player, order.field_name).asc(), Player.id.asc()]
