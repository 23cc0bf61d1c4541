from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from datetime import datetime
from typing import Optional
from ..models.friendships import FriendshipStatus

class FriendshipRequestIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    friend_user_id: PositiveInt = Field(alias='friendUserId')

class FriendshipOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    friend_user_id: int
    status: FriendshipStatus
    created_at: Optional[datetime] = None

class FriendOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str

class ActionOkOut(BaseModel):
    ok: bool = True
