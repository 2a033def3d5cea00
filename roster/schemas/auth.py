"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from roster.schemas.account import AccountOut


class SignupRequest(BaseModel):
    """Raw signup body; the service normalizes and validates it. Unknown keys such as role are ignored."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=256, description="Password")


class SigninRequest(BaseModel):
    """Credentials for sign-in."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=256, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful sign-in."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    account: AccountOut
