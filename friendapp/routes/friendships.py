from typing import List
from fastapi import APIRouter, Depends
from ..schemas.friendships import FriendOut
from ..crud import list_friends
from ..auth import get_current_user

router = APIRouter()


@router.get('/', response_model=List[FriendOut])
async def my_friends(current_user: dict = Depends(get_current_user)):
    return await list_friends(current_user['id'])
