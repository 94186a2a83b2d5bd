from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import Boolean, DateTime, Enum, Integer, String

from player_api.models.dc_models import Profession, Race


class Base(DeclarativeBase):
    pass


class Player(Base):
    __tablename__ = "player"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(12), nullable=False)
    title = Column(String(30), nullable=False)
    race = Column(Enum(Race, name="race"), nullable=False)
    profession = Column(Enum(Profession, name="profession"), nullable=False)
    experience = Column(Integer, nullable=False)
    level = Column(Integer, nullable=False)
    until_next_level = Column(Integer, nullable=False)
    birthday = Column(DateTime, nullable=False)  # naive UTC
    banned = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"Player(id={self.id!r}, name={self.name!r}, level={self.level!r})"
