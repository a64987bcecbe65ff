"""Unit tests for the User aggregate."""

from datetime import datetime, timezone

from gymapp.domain.user import User

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _user(user_id: int | None = 1) -> User:
    return User(
        email="alice@example.com",
        password_hash="hash",
        id=user_id,
        created_at=CREATED,
        updated_at=CREATED,
    )


class TestUserCreation:
    def test_create_is_not_persisted(self):
        user = User.create("alice@example.com", "hash")

        assert user.id is None
        assert not user.is_persisted
        assert user.height == 0
        assert user.weight == 0
        assert user.goal == ""
        assert user.created_at.tzinfo is not None

    def test_reconstitute_keeps_all_fields(self):
        user = User.reconstitute(
            id=3,
            email="alice@example.com",
            password_hash="hash",
            height=180,
            weight=75,
            goal="Run a marathon",
            created_at=CREATED,
            updated_at=CREATED,
        )

        assert user.is_persisted
        assert user.id == 3
        assert (user.height, user.weight, user.goal) == (180, 75, "Run a marathon")


class TestProfileUpdate:
    def test_update_only_given_fields(self):
        user = _user()

        user.update_profile(weight=80)

        assert user.weight == 80
        assert user.height == 0
        assert user.goal == ""
        assert user.updated_at > CREATED

    def test_update_all_fields(self):
        user = _user()

        user.update_profile(height=170, weight=60, goal="Stay fit")

        assert (user.height, user.weight, user.goal) == (170, 60, "Stay fit")


class TestIdentity:
    def test_equal_by_id(self):
        assert _user(1) == _user(1)
        assert _user(1) != _user(2)
        assert hash(_user(1)) == hash(_user(1))

    def test_unsaved_users_are_not_equal(self):
        assert _user(None) != _user(None)

    def test_repr_hides_password_hash(self):
        assert "hash" not in repr(_user())
