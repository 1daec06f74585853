"""Pydantic schemas for the players HTTP transport."""

from typing import Optional

from pydantic import BaseModel, Field


class CreatePlayerRequest(BaseModel):
    """Schema for creating a new player."""

    firstname: str = Field(default="", description="Player first name")
    lastname: str = Field(default="", description="Player last name")
    nickname: str = Field(default="", description="Unique player nickname")
    email: str = Field(default="", description="Unique player email address")
    password: str = Field(default="", description="Plaintext password")
    country: str = Field(default="", description="Player country")


class UpdatePlayerRequest(BaseModel):
    """Schema for updating an existing player.

    Omitted fields are left unchanged.
    """

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    nickname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    country: Optional[str] = None


class CreatePlayerReply(BaseModel):
    player_id: Optional[str] = Field(None, description="Identifier of the new player")
    error: Optional[str] = Field(None, description="Business error, if any")


class UpdatePlayerReply(BaseModel):
    ok: bool
    error: Optional[str] = None


class DeletePlayerReply(BaseModel):
    ok: bool
    error: Optional[str] = None


class PlayerItemResponse(BaseModel):
    """Schema for a player in search results."""

    id: str
    firstname: str
    lastname: str
    nickname: str
    country: str


class SearchPlayersReply(BaseModel):
    """Schema for paginated player search response."""

    items: list[PlayerItemResponse] = Field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0
    error: Optional[str] = None
