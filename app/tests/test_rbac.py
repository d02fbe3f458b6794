import jwt
import pytest

from auth.auth_handler import CurrentUser, decode_jwt, user_from_payload
from auth.rbac import ROLE_PERMISSIONS, Permission, Role, has_permission
from conftest import make_token


def test_decode_valid_token():
    payload = decode_jwt(make_token(roles=["user"], username="alice"))

    assert payload["preferred_username"] == "alice"


def test_decode_expired_token():
    assert decode_jwt(make_token(expires_in=-10)) is None


def test_decode_token_with_wrong_secret():
    token = jwt.encode({"preferred_username": "mallory"}, "other-secret", algorithm="HS256")

    assert decode_jwt(token) is None


def test_decode_garbage():
    assert decode_jwt("not-a-token") is None


def test_roles_from_realm_access():
    user = user_from_payload({"preferred_username": "alice", "realm_access": {"roles": ["Admin", "user"]}})

    assert user == CurrentUser(username="alice", roles=["admin", "user"])


def test_roles_from_top_level_claim():
    user = user_from_payload({"sub": "1234", "roles": ["user"]})

    assert user.username == "1234"
    assert user.roles == ["user"]


def test_no_roles():
    assert user_from_payload({"sub": "x"}).roles == []


def test_admin_has_every_permission():
    assert ROLE_PERMISSIONS[Role.ADMIN] == set(Permission)


@pytest.mark.parametrize("permission", [Permission.CREATE_AUTO, Permission.UPDATE_AUTO, Permission.UPLOAD_FILE])
def test_user_can_write(permission):
    assert has_permission(CurrentUser("alice", ["user"]), permission)


def test_user_cannot_delete():
    assert not has_permission(CurrentUser("alice", ["user"]), Permission.DELETE_AUTO)


def test_admin_can_delete():
    assert has_permission(CurrentUser("bob", ["admin"]), Permission.DELETE_AUTO)


def test_anonymous_has_no_permission():
    assert not has_permission(None, Permission.CREATE_AUTO)


def test_unknown_role_has_no_permission():
    assert not has_permission(CurrentUser("eve", ["gast"]), Permission.CREATE_AUTO)
