import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from . import Base


class FriendshipStatus(str, enum.Enum):
    requested = 'requested'
    accepted = 'accepted'
    declined = 'declined'


class Friendship(Base):
    """Directed edge owned by ``user_id``; a mutual friendship is two accepted rows."""
    __tablename__ = 'friendships'
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    friend_user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    status = Column(String(20), nullable=False, default=FriendshipStatus.requested.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    __table_args__ = (
        UniqueConstraint('user_id', 'friend_user_id', name='uix_friendship_pair'),
    )
