from typing import Optional

from pydantic import EmailStr, Field

from .common import CamelModel

# ======================
# AUTH REQUEST SCHEMAS
# ======================
# Presence of required fields is checked by the handlers so the API can
# answer with its own "missing fields" message.


class RegisterRequest(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    user_type: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    profile_image_url: Optional[str] = Field(None, max_length=500)


class TokenData(CamelModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    user_type: Optional[str] = None
