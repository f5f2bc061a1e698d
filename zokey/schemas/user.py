from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

SubscriptionStatus = Literal["none", "active", "expired", "grace_period"]


class User(BaseModel):
    id: str
    device_id: str
    region: str = "UK"
    currency: str = "GBP"
    free_searches_used: int = Field(default=0, ge=0)
    free_searches_limit: int = Field(default=3, ge=0)
    subscription_status: SubscriptionStatus = "none"
    subscription_expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def can_search(self) -> bool:
        return self.subscription_status == "active" or self.free_searches_used < self.free_searches_limit

    @property
    def free_searches_remaining(self) -> int:
        return max(0, self.free_searches_limit - self.free_searches_used)


class RegisterRequest(BaseModel):
    device_id: str = Field(..., min_length=1)
    region: str = "UK"


class UserStatusResponse(BaseModel):
    user_id: str
    free_searches_remaining: int
    subscription_status: SubscriptionStatus
    subscription_expires_at: datetime | None = None
    can_search: bool
