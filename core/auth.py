"""Bearer-token verification against Supabase Auth"""
import asyncio
import logging
from typing import Optional

from pydantic import BaseModel
from supabase import Client

from core.exceptions import Unauthenticated

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """An authenticated end user"""
    user_id: str
    email: Optional[str] = None


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise Unauthenticated("Authentication required")
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Invalid authentication token")
    return token.strip()


class SupabaseAuthenticator:
    """Resolves an Authorization header to an Identity using Supabase Auth"""

    def __init__(self, auth_client: Client):
        self.auth_client = auth_client

    async def authenticate(self, authorization: Optional[str]) -> Identity:
        token = extract_bearer_token(authorization)

        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(None, self.auth_client.auth.get_user, token)
        except Exception as e:
            logger.error(f"Invalid user token: {e}")
            raise Unauthenticated("Invalid authentication token") from e

        user = getattr(response, "user", None)
        if user is None:
            logger.error("Invalid user token: no user returned")
            raise Unauthenticated("Invalid authentication token")

        return Identity(user_id=str(user.id), email=getattr(user, "email", None))
