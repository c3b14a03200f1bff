from jose import JWTError, jwt
from bizdesk.config import settings
from bizdesk.core.exceptions import NoPrincipalException


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using shared SECRET_KEY.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub' (user email), 'exp' and
        optionally 'tenant_id'

    Raises:
        NoPrincipalException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise NoPrincipalException(f"Invalid token: {str(e)}")

    # jose validates 'exp' when present but does not require it
    if payload.get("exp") is None:
        raise NoPrincipalException("Token missing expiration")

    if not payload.get("sub"):
        raise NoPrincipalException("Token missing user identifier")

    return payload


def extract_principal(token: str) -> tuple[str, str | None]:
    """Extract (email, tenant_id claim) from JWT token"""
    payload = decode_jwt(token)
    return payload["sub"].strip().lower(), payload.get("tenant_id")
