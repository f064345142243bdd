"""Session identity resolution against Supabase auth."""

from typing import Optional
from taskboard.models.identity import Identity
from taskboard.services.supabase_client import SupabaseClient
from taskboard.utils.errors import AuthenticationError, SupabaseError
from taskboard.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)

# gotrue reports rejected tokens with these HTTP statuses
_REJECTED_TOKEN_STATUSES = (400, 401, 403)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def resolve_identity(access_token: Optional[str]) -> Optional[Identity]:
    """
    Resolve an access token to the signed-in user.

    Returns None when there is no token or Supabase rejects it
    (unauthenticated). Other failures raise SupabaseError.
    """
    if not access_token:
        return None

    async with SupabaseClient("resolve_identity") as client:
        try:
            response = client.auth.get_user(access_token)
        except Exception as e:
            if getattr(e, "status", None) in _REJECTED_TOKEN_STATUSES:
                logger.info("Access token rejected", status=getattr(e, "status", None))
                return None
            raise SupabaseError(f"Failed to resolve session: {e}")

    user = getattr(response, "user", None) if response else None
    if user is None:
        return None

    metadata = getattr(user, "user_metadata", None) or {}
    identity = Identity(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        display_name=metadata.get("name"),
    )
    logger.debug("Resolved session identity", user_id=mask_user_id(identity.user_id))
    return identity


async def require_identity(access_token: Optional[str]) -> Identity:
    """Like resolve_identity, but raises AuthenticationError when unauthenticated."""
    identity = await resolve_identity(access_token)
    if identity is None:
        raise AuthenticationError("Authentication required")
    return identity
