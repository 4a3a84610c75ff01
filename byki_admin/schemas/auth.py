"""Auth API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from byki_admin.domain.enums import UserRole


class LoginRequest(BaseModel):
    """Request body for admin login (Firebase email/password)."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminResponse(BaseModel):
    """The signed-in dashboard operator."""

    model_config = ConfigDict(from_attributes=True)

    uid: str
    email: str
    name: str
    role: UserRole


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    admin: AdminResponse
