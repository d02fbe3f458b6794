from typing import Optional

from fastapi import HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.auth_handler import CurrentUser, decode_jwt, user_from_payload


class JWTBearer(HTTPBearer):
    """
    Bearer token dependency. Resolves to the CurrentUser of the request.

    With optional=True a request without Authorization header resolves to
    None instead of 401; a header with an invalid token is still rejected.
    """

    def __init__(self, optional: bool = False):
        super().__init__(auto_error=False)
        self.optional = optional

    async def __call__(self, request: Request) -> Optional[CurrentUser]:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if credentials is None:
            if self.optional and "Authorization" not in request.headers:
                return None
            raise HTTPException(status_code=401, detail="Invalid authorization header")

        if credentials.scheme.lower() != "bearer":
            raise HTTPException(status_code=401, detail="Invalid authentication scheme")

        payload = decode_jwt(credentials.credentials)
        if not payload:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        user = user_from_payload(payload)
        request.state.user_id = user.username
        return user
