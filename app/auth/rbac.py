from enum import Enum
from typing import Optional, Set

from fastapi import Depends, HTTPException

from auth.auth_bearer import JWTBearer
from auth.auth_handler import CurrentUser

FORBIDDEN_MESSAGE = "Kein Token mit ausreichender Berechtigung vorhanden"


class Permission(str, Enum):
    """All application permissions (fine-grained access control)"""

    CREATE_AUTO = "create:auto"
    UPDATE_AUTO = "update:auto"
    DELETE_AUTO = "delete:auto"
    UPLOAD_FILE = "upload:file"


class Role(str, Enum):
    """Realm roles issued by the identity provider (coarse-grained)"""
    USER = "user"
    ADMIN = "admin"


# Permission matrix - what each role can do
ROLE_PERMISSIONS: dict[Role, Set[Permission]] = {
    Role.USER: {
        Permission.CREATE_AUTO,
        Permission.UPDATE_AUTO,
        Permission.UPLOAD_FILE,
    },
    Role.ADMIN: set(Permission),  # All permissions
}


def has_permission(user: Optional[CurrentUser], permission: Permission) -> bool:
    if user is None:
        return False
    for role in Role:
        if role.value in user.roles and permission in ROLE_PERMISSIONS[role]:
            return True
    return False


def require_permission(permission: Permission):
    """
    Dependency factory: 401 without a valid token, 403 when none of the
    caller's roles grants the permission.
    """

    async def checker(user: CurrentUser = Depends(JWTBearer())) -> CurrentUser:
        if not has_permission(user, permission):
            raise HTTPException(status_code=403, detail=FORBIDDEN_MESSAGE)
        return user

    return checker
