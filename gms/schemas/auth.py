"""Authentication and profile schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    username: str = Field(..., min_length=1, max_length=100)
    full_name: str | None = Field(None, max_length=255)
    diet_preference: str = Field("None", max_length=50)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class ProfileUpdate(BaseModel):
    """Update the current user's profile."""

    username: str | None = Field(None, min_length=1, max_length=100)
    full_name: str | None = Field(None, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)
    password: str | None = Field(None, min_length=8, max_length=128)
    diet_preference: str | None = Field(None, max_length=50)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    full_name: str | None
    email: str
    diet_preference: str


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
