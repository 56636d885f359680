"""Response envelope models."""
from datetime import datetime
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None


class PublicUser(BaseModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthPayload(BaseModel):
    user: PublicUser
    token: str = Field(..., description="Bearer token for the Authorization header")


class MessagePayload(BaseModel):
    message: str


class HealthResponse(BaseModel):
    success: bool = True
    status: str = "OK"
    message: str
    timestamp: datetime
