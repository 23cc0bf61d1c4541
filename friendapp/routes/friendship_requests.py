from typing import List
from fastapi import APIRouter, Depends
from ..schemas.friendships import FriendshipRequestIn, FriendshipOut, ActionOkOut
from ..crud import (
    send_friendship_request,
    accept_friendship_request,
    decline_friendship_request,
    list_incoming_requests
)
from ..guards import can_send_friendship_request, can_answer_friendship_request
from ..auth import get_current_user
from ..core import FRIENDSHIP_MUTATIONS

router = APIRouter()


@router.post('/send', response_model=ActionOkOut)
async def send(
    payload: FriendshipRequestIn = Depends(can_send_friendship_request),
    current_user: dict = Depends(get_current_user)
):
    try:
        await send_friendship_request(current_user['id'], payload.friend_user_id)
    except Exception:
        FRIENDSHIP_MUTATIONS.labels(action='send', outcome='error').inc()
        raise
    FRIENDSHIP_MUTATIONS.labels(action='send', outcome='ok').inc()
    return {'ok': True}


@router.post('/accept', response_model=ActionOkOut)
async def accept(
    payload: FriendshipRequestIn = Depends(can_answer_friendship_request),
    current_user: dict = Depends(get_current_user)
):
    try:
        await accept_friendship_request(current_user['id'], payload.friend_user_id)
    except Exception:
        FRIENDSHIP_MUTATIONS.labels(action='accept', outcome='error').inc()
        raise
    FRIENDSHIP_MUTATIONS.labels(action='accept', outcome='ok').inc()
    return {'ok': True}


@router.post('/decline', response_model=ActionOkOut)
async def decline(
    payload: FriendshipRequestIn = Depends(can_answer_friendship_request),
    current_user: dict = Depends(get_current_user)
):
    try:
        await decline_friendship_request(current_user['id'], payload.friend_user_id)
    except Exception:
        FRIENDSHIP_MUTATIONS.labels(action='decline', outcome='error').inc()
        raise
    FRIENDSHIP_MUTATIONS.labels(action='decline', outcome='ok').inc()
    return {'ok': True}


@router.get('/incoming', response_model=List[FriendshipOut])
async def incoming(current_user: dict = Depends(get_current_user)):
    return await list_incoming_requests(current_user['id'])
