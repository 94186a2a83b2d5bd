from pydantic import BaseModel, Field

from player_api.models.dc_models import Profession, Race


class PlayerSchema(BaseModel):
    """Persisted player as returned to the client."""

    id: int
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: int  # epoch milliseconds
    banned: bool
    experience: int
    level: int
    until_next_level: int = Field(alias="untilNextLevel")

    class Config:
        from_attributes = True
        populate_by_name = True
