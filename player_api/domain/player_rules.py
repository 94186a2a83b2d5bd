"""Player validation and level progression rules.

Rule of thumb:
- OK: validation, derivation of level/experience, parsing of identifiers.
- Not OK: touching DB sessions, FastAPI, datetime.now(), etc.

Birthdays are handled as epoch milliseconds (UTC) everywhere in this module.
"""

import math
import re
from datetime import datetime, timedelta
from typing import Mapping

from player_api.domain.exceptions import InvalidPlayerInputError

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 12
TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 30
EXPERIENCE_MIN = 0
EXPERIENCE_MAX = 10_000_000
BIRTHDAY_MIN_YEAR = 2000
BIRTHDAY_MAX_YEAR = 3000

REQUIRED_FIELDS = ("name", "title", "race", "profession", "birthday", "experience")
SETTABLE_FIELDS = ("name", "title", "race", "profession", "birthday", "experience", "banned")

# Identifiers are signed 64-bit integers written in decimal.
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MAX = 2**63 - 1

EPOCH = datetime(1970, 1, 1)


# ==============================================================================
# ==== Level progression =======================================================
# ==============================================================================


def calculate_level(experience: int) -> int:
    """Return the level reached with the given cumulative experience.

    level = floor((sqrt(2500 + 200 * experience) - 50) / 100)

    The integer square root gives the same truncated result as the
    floating point formula: level boundaries fall on perfect squares.
    """
    return (math.isqrt(2500 + 200 * experience) - 50) // 100


def calculate_until_next_level(experience: int, level: int) -> int:
    """Return the experience still missing to reach ``level + 1``."""
    return 50 * (level + 1) * (level + 2) - experience


def derive_progress(experience: int) -> tuple[int, int]:
    """Return ``(level, until_next_level)`` for the given experience."""
    level = calculate_level(experience)
    return level, calculate_until_next_level(experience, level)


# ==============================================================================
# ==== Identifiers =============================================================
# ==============================================================================


def parse_player_id(raw_id: str) -> int:
    """Parse a path identifier into a positive integer.

    Raises:
        InvalidPlayerInputError: the value is not a decimal integer, does not
            fit in 64 bits, or is not strictly positive.
    """
    if raw_id is None or not _ID_PATTERN.fullmatch(raw_id):
        raise InvalidPlayerInputError(f"Invalid player id: {raw_id!r}")
    player_id = int(raw_id)
    if player_id <= 0 or player_id > _ID_MAX:
        raise InvalidPlayerInputError(f"Invalid player id: {raw_id!r}")
    return player_id


# ==============================================================================
# ==== Field validation ========================================================
# ==============================================================================


def birthday_year(birthday: int) -> int:
    """Calendar year (UTC) of an epoch-millisecond timestamp."""
    return (EPOCH + timedelta(milliseconds=birthday)).year


def text_length(value: str) -> int:
    """Length in UTF-16 code units; characters outside the BMP count twice."""
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def _check_name(name: str) -> None:
    if not NAME_MIN_LENGTH <= text_length(name) <= NAME_MAX_LENGTH:
        raise InvalidPlayerInputError(
            f"name must be {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters long"
        )


def _check_title(title: str) -> None:
    if not TITLE_MIN_LENGTH <= text_length(title) <= TITLE_MAX_LENGTH:
        raise InvalidPlayerInputError(
            f"title must be {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters long"
        )


def _check_experience(experience: int) -> None:
    if not EXPERIENCE_MIN <= experience <= EXPERIENCE_MAX:
        raise InvalidPlayerInputError(
            f"experience must be between {EXPERIENCE_MIN} and {EXPERIENCE_MAX}"
        )


def _check_birthday_year(birthday: int) -> None:
    try:
        year = birthday_year(birthday)
    except OverflowError:
        raise InvalidPlayerInputError("birthday is out of range")
    if not BIRTHDAY_MIN_YEAR <= year <= BIRTHDAY_MAX_YEAR:
        raise InvalidPlayerInputError(
            f"birthday year must be between {BIRTHDAY_MIN_YEAR} and {BIRTHDAY_MAX_YEAR}"
        )


def validate_new_player(fields: Mapping) -> None:
    """Check a create payload.

    Args:
        fields (Mapping): present payload fields, absent ones left out

    Raises:
        InvalidPlayerInputError: a required field is missing or a value is out of range
    """
    missing = [name for name in REQUIRED_FIELDS if fields.get(name) is None]
    if missing:
        raise InvalidPlayerInputError(f"Missing required fields: {', '.join(missing)}")

    _check_name(fields["name"])
    _check_title(fields["title"])
    _check_experience(fields["experience"])
    if fields["birthday"] < 0:
        raise InvalidPlayerInputError("birthday must not be negative")
    _check_birthday_year(fields["birthday"])


def has_changes(changes: Mapping) -> bool:
    """True when the update payload carries at least one settable field."""
    return any(changes.get(name) is not None for name in SETTABLE_FIELDS)


def validate_player_changes(changes: Mapping) -> None:
    """Check only the fields present in an update payload.

    Raises:
        InvalidPlayerInputError: a present value is out of range
    """
    if changes.get("name") is not None:
        _check_name(changes["name"])
    if changes.get("title") is not None:
        _check_title(changes["title"])
    if changes.get("experience") is not None:
        _check_experience(changes["experience"])
    if changes.get("birthday") is not None:
        _check_birthday_year(changes["birthday"])
