"""Preconditions checked against stored state before a friendship mutation runs."""
import logging
from fastapi import Depends, HTTPException
from .auth import get_current_user
from .crud import user_exists, get_pending_request
from .schemas.friendships import FriendshipRequestIn

logger = logging.getLogger(__name__)

async def can_send_friendship_request(
    payload: FriendshipRequestIn,
    current_user: dict = Depends(get_current_user)
) -> FriendshipRequestIn:
    if not await user_exists(payload.friend_user_id):
        logger.info({'msg': 'send_rejected', 'user_id': current_user['id'], 'friend_user_id': payload.friend_user_id})
        raise HTTPException(400, 'BAD_REQUEST')
    return payload

async def can_answer_friendship_request(
    payload: FriendshipRequestIn,
    current_user: dict = Depends(get_current_user)
) -> FriendshipRequestIn:
    # the pending row runs from the original sender to the acting user
    if await get_pending_request(payload.friend_user_id, current_user['id']) is None:
        logger.info({'msg': 'answer_rejected', 'user_id': current_user['id'], 'friend_user_id': payload.friend_user_id})
        raise HTTPException(400, 'BAD_REQUEST')
    return payload
