from fastapi import APIRouter
from .friendship_requests import router as friendship_requests_router
from .friendships import router as friendships_router

router = APIRouter()
router.include_router(friendship_requests_router, prefix='/friendship-requests', tags=['friendship-requests'])
router.include_router(friendships_router, prefix='/friendships', tags=['friendships'])
