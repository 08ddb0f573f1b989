"""Tests for role and ownership checks."""

import pytest

from game_reviews.authorization import (
    Identity,
    Role,
    ensure_can_modify,
    is_owner,
    require_admin,
    require_role,
    resolve_owner,
)
from game_reviews.errors import ForbiddenError
from game_reviews.identity import map_identity

USER = Identity(subject="user-guid", username="alice", role=Role.USER)
ADMIN = Identity(subject="admin-guid", username="root", role=Role.ADMIN)
NO_SUBJECT = Identity(subject="", username="ghost", role=Role.USER)


class TestIdentity:
    """Tests for the Identity value."""

    def test_user_id_is_mapped_subject(self) -> None:
        assert USER.user_id == map_identity("user-guid")

    def test_is_admin(self) -> None:
        assert ADMIN.is_admin
        assert not USER.is_admin


class TestRoleChecks:
    """Tests for require_role and require_admin."""

    def test_require_role_allows_listed_roles(self) -> None:
        assert require_role(USER, Role.USER, Role.ADMIN) is USER
        assert require_role(ADMIN, Role.USER, Role.ADMIN) is ADMIN

    def test_require_role_rejects_other_roles(self) -> None:
        with pytest.raises(ForbiddenError):
            require_role(USER, Role.ADMIN)

    def test_require_admin(self) -> None:
        assert require_admin(ADMIN) is ADMIN
        with pytest.raises(ForbiddenError):
            require_admin(USER)


class TestOwnership:
    """Tests for ownership decisions."""

    def test_is_owner(self) -> None:
        assert is_owner(USER, USER.user_id)
        assert not is_owner(USER, USER.user_id + 1)

    def test_anonymous_owns_nothing(self) -> None:
        assert not is_owner(None, 0)
        assert not is_owner(None, USER.user_id)

    def test_missing_identity_owns_nothing(self) -> None:
        """Test that a caller mapping to 0 does not own rows attributed to 0."""
        assert not is_owner(NO_SUBJECT, 0)

    def test_owner_can_modify(self) -> None:
        ensure_can_modify(USER, USER.user_id, "nope")

    def test_admin_can_modify_anything(self) -> None:
        ensure_can_modify(ADMIN, USER.user_id, "nope")

    def test_other_user_cannot_modify(self) -> None:
        with pytest.raises(ForbiddenError, match="nope"):
            ensure_can_modify(USER, USER.user_id + 1, "nope")

    def test_caller_without_identity_cannot_modify(self) -> None:
        with pytest.raises(ForbiddenError, match="Unable to determine user identity"):
            ensure_can_modify(NO_SUBJECT, 0, "nope")


class TestResolveOwner:
    """Tests for attributing new rows."""

    def test_user_request_override_is_ignored(self) -> None:
        assert resolve_owner(USER, 12345) == USER.user_id

    def test_user_without_request(self) -> None:
        assert resolve_owner(USER, None) == USER.user_id

    def test_admin_override_is_honored(self) -> None:
        assert resolve_owner(ADMIN, 12345) == 12345

    @pytest.mark.parametrize("requested", [None, 0, -3])
    def test_admin_falls_back_to_self(self, requested: int | None) -> None:
        assert resolve_owner(ADMIN, requested) == ADMIN.user_id

    def test_no_identity_is_forbidden(self) -> None:
        with pytest.raises(ForbiddenError):
            resolve_owner(NO_SUBJECT, None)
