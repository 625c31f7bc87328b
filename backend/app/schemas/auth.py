"""
Authentication Pydantic schemas.

Defines request and response schemas for the placeholder login endpoint.
"""

from pydantic import BaseModel, Field


class UserLogin(BaseModel):
    """
    Schema for user login.

    Used by POST /login endpoint.
    """
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class TokenResponse(BaseModel):
    """
    Schema for token response.

    Returned by a successful login. The password is never echoed back.
    """
    email: str = Field(..., description="Email address")
    token: str = Field(..., description="Signed JWT")
    token_type: str = Field(default="bearer", description="Token type")
