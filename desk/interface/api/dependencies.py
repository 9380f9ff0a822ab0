"""Request authentication helpers shared by routes."""

from uuid import UUID

from desk.domain.error import NotAuthenticatedError
from desk.domain.service import JWTService
from desk.util.jwt import TokenPayload


def require_user(jwt_service: JWTService, auth_token: str | None) -> TokenPayload:
    """Get the signed-in user's token payload.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie

    Returns:
        Verified token payload

    Raises:
        NotAuthenticatedError: If the token is missing, invalid or expired
    """
    payload = jwt_service.get_payload_from_token(auth_token)
    if payload is None:
        raise NotAuthenticatedError("Authentication required")

    try:
        UUID(payload.user_id)
    except ValueError:
        raise NotAuthenticatedError("Token does not carry a valid user id")

    return payload
