import uuid
from typing import Optional

from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """Identity extracted from a verified Supabase access token."""

    id: uuid.UUID
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_claims(cls, claims: dict) -> "AuthenticatedUser":
        metadata = claims.get("user_metadata") or {}
        return cls(
            id=claims["sub"],
            email=claims.get("email"),
            display_name=metadata.get("full_name") or metadata.get("name"),
            photo_url=metadata.get("avatar_url") or metadata.get("picture"),
        )
