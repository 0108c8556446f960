"""
Arsip Server - Token Data Model

Pydantic model for the identity carried in the session token.
"""

from pydantic import BaseModel

from models.enums import UserRole


class TokenData(BaseModel):
    """Identity stored in the JWT session token"""
    id: int
    username: str
    role: UserRole
    full_name: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
