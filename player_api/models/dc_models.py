from pydantic import BaseModel, Field
from enum import Enum
from typing import Optional


class Race(str, Enum):
    HUMAN = "HUMAN"
    DWARF = "DWARF"
    ELF = "ELF"
    GIANT = "GIANT"
    ORC = "ORC"
    TROLL = "TROLL"
    HOBBIT = "HOBBIT"


class Profession(str, Enum):
    WARRIOR = "WARRIOR"
    ROGUE = "ROGUE"
    SORCERER = "SORCERER"
    CLERIC = "CLERIC"
    PALADIN = "PALADIN"
    NAZGUL = "NAZGUL"
    WARLOCK = "WARLOCK"
    DRUID = "DRUID"


class PlayerOrder(str, Enum):
    """Sort keys accepted by the list endpoint, mapped to column names."""

    ID = "ID"
    NAME = "NAME"
    EXPERIENCE = "EXPERIENCE"
    BIRTHDAY = "BIRTHDAY"
    LEVEL = "LEVEL"

    @property
    def field_name(self) -> str:
        return self.value.lower()


class PlayerModel(BaseModel):
    """Player payload sent by the client on create and update.

    Every field is optional so that absence can be told apart from a value;
    create requires the mandatory ones explicitly, update applies only what
    is present. ``id``, ``level`` and ``untilNextLevel`` are never read.
    """

    name: Optional[str] = None
    title: Optional[str] = None
    race: Optional[Race] = None
    profession: Optional[Profession] = None
    birthday: Optional[int] = None  # epoch milliseconds
    banned: Optional[bool] = None
    experience: Optional[int] = None

    def present_fields(self) -> dict:
        return self.model_dump(exclude_none=True)


class PlayerFilterModel(BaseModel):
    name: Optional[str] = None
    title: Optional[str] = None
    race: Optional[Race] = None
    profession: Optional[Profession] = None
    after: Optional[int] = None
    before: Optional[int] = None
    banned: Optional[bool] = None
    min_experience: Optional[int] = None
    max_experience: Optional[int] = None
    min_level: Optional[int] = None
    max_level: Optional[int] = None


class PageModel(BaseModel):
    order: PlayerOrder = PlayerOrder.ID
    page_number: int = Field(default=0, ge=0)
    page_size: int = Field(default=3, ge=1)
