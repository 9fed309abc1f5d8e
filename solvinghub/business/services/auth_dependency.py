from typing import Optional

from fastapi import Depends, Request

from solvinghub.business.services.auth_util import decode_token
from solvinghub.data.schemas import AuthenticatedUser
from solvinghub.errors import AuthenticationException


class BearerToken:
    """
    Reads the Supabase access token from the Authorization header, falling
    back to the ``access_token`` cookie.
    """

    def __init__(self, cookie_name: str = "access_token", required: bool = True):
        self.cookie_name = cookie_name
        self.required = required

    def extract(self, request: Request) -> Optional[str]:
        header = request.headers.get("Authorization") or ""
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
        return request.cookies.get(self.cookie_name)

    async def __call__(self, request: Request) -> Optional[dict]:
        token = self.extract(request)
        if not token:
            if self.required:
                raise AuthenticationException(detail="Unauthorized")
            return None

        token_data = decode_token(token)
        if not token_data:
            if self.required:
                raise AuthenticationException(detail="Invalid or expired token")
            return None
        return token_data


def get_current_user(
    token_data: dict = Depends(BearerToken()),
) -> AuthenticatedUser:
    try:
        return AuthenticatedUser.from_claims(token_data)
    except Exception:
        raise AuthenticationException(detail="Could not validate user")


def get_optional_user(
    token_data: Optional[dict] = Depends(BearerToken(required=False)),
) -> Optional[AuthenticatedUser]:
    if not token_data:
        return None
    try:
        return AuthenticatedUser.from_claims(token_data)
    except Exception:
        return None
