from dataclasses import dataclass
from typing import Any, Dict, Optional

from jwt import api_jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from app.core.config import settings
from app.core.exceptions import AuthenticationFailed


@dataclass(frozen=True)
class Principal:
    """Identity of the caller, decoded from a verified bearer token."""
    id: str
    email: Optional[str]
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role in settings.ADMIN_ROLES


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        dict: The decoded token payload

    Raises:
        AuthenticationFailed: If token is invalid or expired
    """
    try:
        return api_jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        raise AuthenticationFailed("Token has expired")
    except InvalidTokenError:
        raise AuthenticationFailed("Invalid token")


def principal_from_token(token: str) -> Principal:
    payload = decode_access_token(token)
    subject = payload.get("sub")
    email = payload.get("email")
    # Ownership and audit columns are keyed on the email claim
    if not subject or not email:
        raise AuthenticationFailed("Invalid token payload")
    return Principal(
        id=str(subject),
        email=email,
        role=payload.get("role"),
    )


def is_owner_or_admin(owner: Optional[str], principal: Principal) -> bool:
    """Owner-guarded mutations compare the stored owner with the email claim."""
    return principal.is_admin or (owner is not None and owner == principal.email)
