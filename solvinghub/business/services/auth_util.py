from typing import Any

import jwt

from solvinghub.config import Config, logger

auth_logger = logger.getChild("auth")


def decode_token(token: str) -> Any | None:
    """
    Verifies a Supabase-issued access token and returns its claims.
    Returns None when the signature, expiry or audience check fails.
    """
    if not Config.SUPABASE_JWT_SECRET:
        return None
    try:
        token_data = jwt.decode(
            jwt=token,
            key=Config.SUPABASE_JWT_SECRET,
            algorithms=[Config.JWT_ALGORITHM],
            audience=Config.SUPABASE_JWT_AUDIENCE,
        )
    except jwt.PyJWTError as e:
        auth_logger.info(f"Rejected token: {str(e)}")
        return None
    if not token_data.get("sub"):
        return None
    return token_data
