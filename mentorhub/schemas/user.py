from datetime import datetime
from typing import Optional

from .common import CamelModel


# ======================
# USER DISPLAY
# ======================

class UserResponse(CamelModel):
    """Public view of a user; the password hash never leaves the server."""
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str
    user_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    user: UserResponse
    token: str
