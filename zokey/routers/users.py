from fastapi import APIRouter, Depends

from zokey.core.mongo import get_mongo_db
from zokey.schemas.user import RegisterRequest, User, UserStatusResponse
from zokey.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service() -> UserService:
    db = get_mongo_db()
    return UserService(db)


def to_status(user: User) -> UserStatusResponse:
    return UserStatusResponse(
        user_id=user.id,
        free_searches_remaining=user.free_searches_remaining,
        subscription_status=user.subscription_status,
        subscription_expires_at=user.subscription_expires_at,
        can_search=user.can_search,
    )


@router.post("/register", response_model=UserStatusResponse)
async def register_device(request: RegisterRequest, service: UserService = Depends(get_user_service)):
    """Register a device (idempotent) and return its quota status."""
    user = await service.register(request.device_id, request.region.upper())
    return to_status(user)


@router.get("/{user_id}/status", response_model=UserStatusResponse)
async def get_user_status(user_id: str, service: UserService = Depends(get_user_service)):
    user = await service.get_user(user_id)
    return to_status(user)
