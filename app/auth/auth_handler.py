from dataclasses import dataclass, field
from typing import List, Optional

import jwt

from core.config import JWT_ALGORITHM, JWT_AUDIENCE, JWT_SECRET


@dataclass
class CurrentUser:
    username: str
    roles: List[str] = field(default_factory=list)

    def has_role(self, *roles: str) -> bool:
        return any(role in self.roles for role in roles)


def decode_jwt(token: str) -> Optional[dict]:
    """Decode a bearer token issued by the identity provider; None if invalid or expired."""
    options = {"verify_aud": JWT_AUDIENCE is not None}
    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def user_from_payload(payload: dict) -> CurrentUser:
    """
    Builds the caller from the token claims. Keycloak puts the realm roles
    below realm_access.roles; other providers use a top-level roles claim.
    """
    realm_access = payload.get("realm_access") or {}
    roles = realm_access.get("roles") or payload.get("roles") or []
    username = payload.get("preferred_username") or payload.get("sub") or ""
    return CurrentUser(username=username, roles=[str(r).lower() for r in roles])

