import logging
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased
from .models import AsyncSessionLocal
from .models.users import User
from .models.friendships import Friendship, FriendshipStatus

logger = logging.getLogger(__name__)

# users
async def user_exists(user_id: int) -> bool:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(User.id).where(User.id == user_id).limit(1))
        return q.scalars().first() is not None

# friendships
def _pair(user_id: int, friend_user_id: int):
    return (Friendship.user_id == user_id, Friendship.friend_user_id == friend_user_id)

async def get_friendship(user_id: int, friend_user_id: int):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Friendship).where(*_pair(user_id, friend_user_id)))
        return q.scalars().first()

async def get_pending_request(from_user: int, to_user: int):
    async with AsyncSessionLocal() as session:
        q = await session.execute(
            select(Friendship.id)
            .where(*_pair(from_user, to_user), Friendship.status == FriendshipStatus.requested.value)
            .limit(1)
        )
        return q.scalars().first()

async def _set_status(session, user_id: int, friend_user_id: int, status: FriendshipStatus):
    await session.execute(
        update(Friendship).where(*_pair(user_id, friend_user_id)).values(status=status.value)
    )

async def _get_status(session, user_id: int, friend_user_id: int):
    q = await session.execute(select(Friendship.status).where(*_pair(user_id, friend_user_id)))
    return q.scalars().first()

async def send_friendship_request(user_id: int, friend_user_id: int):
    """Record a request from ``user_id`` to ``friend_user_id``.

    Safe to retry: a pending or accepted pair is left alone, a declined pair
    is re-opened, and only a missing pair gets a new row.
    """
    async with AsyncSessionLocal() as session:
        current = await _get_status(session, user_id, friend_user_id)

        if current == FriendshipStatus.declined.value:
            await _set_status(session, user_id, friend_user_id, FriendshipStatus.requested)
            await session.commit()
            logger.info({'msg': 'friendship_request_resent', 'user_id': user_id, 'friend_user_id': friend_user_id})
            return
        if current is not None:
            logger.debug({'msg': 'friendship_request_noop', 'status': current,
                          'user_id': user_id, 'friend_user_id': friend_user_id})
            return

        try:
            session.add(Friendship(user_id=user_id, friend_user_id=friend_user_id,
                                   status=FriendshipStatus.requested.value))
            await session.commit()
        except IntegrityError:
            await session.rollback()
            # only a concurrent send of the same pair counts as done
            res = await session.execute(select(Friendship.id).where(*_pair(user_id, friend_user_id)))
            if res.scalars().first() is None:
                raise
            logger.info({'msg': 'friendship_request_conflict', 'user_id': user_id, 'friend_user_id': friend_user_id})
            return
        logger.info({'msg': 'friendship_request_sent', 'user_id': user_id, 'friend_user_id': friend_user_id})

async def _accept_reverse(session, user_id: int, friend_user_id: int):
    q = await session.execute(select(Friendship.id).where(*_pair(user_id, friend_user_id)))
    if q.scalars().first() is None:
        session.add(Friendship(user_id=user_id, friend_user_id=friend_user_id,
                               status=FriendshipStatus.accepted.value))
        await session.flush()
    else:
        # both users had requested each other
        await _set_status(session, user_id, friend_user_id, FriendshipStatus.accepted)

async def accept_friendship_request(user_id: int, friend_user_id: int):
    """Accept the request ``friend_user_id`` sent to ``user_id``.

    Both directed rows end up ``accepted`` or, on any failure, neither changes.
    """
    async with AsyncSessionLocal() as session:
        async with session.begin():
            await _set_status(session, friend_user_id, user_id, FriendshipStatus.accepted)
            await _accept_reverse(session, user_id, friend_user_id)
    logger.info({'msg': 'friendship_request_accepted', 'user_id': user_id, 'friend_user_id': friend_user_id})

async def decline_friendship_request(user_id: int, friend_user_id: int):
    # only the sender's row changes; no reverse row exists before an accept
    async with AsyncSessionLocal() as session:
        await _set_status(session, friend_user_id, user_id, FriendshipStatus.declined)
        await session.commit()
    logger.info({'msg': 'friendship_request_declined', 'user_id': user_id, 'friend_user_id': friend_user_id})

async def list_incoming_requests(user_id: int):
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(Friendship)
            .where(Friendship.friend_user_id == user_id, Friendship.status == FriendshipStatus.requested.value)
            .order_by(Friendship.id)
        )
        return res.scalars().all()

async def list_friends(user_id: int):
    """Users sharing a mutual accepted pair with ``user_id``."""
    reverse = aliased(Friendship)
    async with AsyncSessionLocal() as session:
        res = await session.execute(
            select(User)
            .join(Friendship, Friendship.friend_user_id == User.id)
            .join(reverse, (reverse.user_id == User.id) & (reverse.friend_user_id == user_id))
            .where(
                Friendship.user_id == user_id,
                Friendship.status == FriendshipStatus.accepted.value,
                reverse.status == FriendshipStatus.accepted.value,
            )
            .order_by(User.id)
        )
        return res.scalars().all()
