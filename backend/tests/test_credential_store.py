import pytest

from app.exceptions import ValidationError
from app.models.user import Role
from app.services.credential_store import CredentialStore
from app.utils.password_policy import PasswordPolicy, validate_password

PASSWORD = "Abcd1234!"


@pytest.fixture
def store(db_session):
    return CredentialStore(db_session, PasswordPolicy())


async def test_new_users_are_unconfirmed_members_of_user_role(store):
    user = await store.create("a@example.com", "Alice Example", PASSWORD)

    assert user.email_confirmed is False
    assert user.username == "a@example.com"
    assert await store.get_roles(user) == [Role.USER]
    assert user.hashed_password != PASSWORD
    assert store.verify_password(user, PASSWORD)


async def test_email_lookup_ignores_case(store):
    user = await store.create("Mixed.Case@Example.com", "Alice Example", PASSWORD)

    found = await store.find_by_email("mixed.case@example.COM")

    assert found is not None
    assert found.id == user.id
    assert found.email == "Mixed.Case@Example.com"


async def test_duplicate_email_is_rejected_regardless_of_case(store):
    await store.create("a@example.com", "Alice Example", PASSWORD)

    with pytest.raises(ValidationError) as exc:
        await store.create("A@EXAMPLE.COM", "Other Alice", PASSWORD)

    assert "email" in exc.value.errors


@pytest.mark.parametrize(
    "password, message",
    [
        ("Ab1!", "at least 8 characters"),
        ("abcd1234!", "uppercase"),
        ("ABCD1234!", "lowercase"),
        ("Abcdefgh!", "number"),
        ("Abcd12345", "symbol"),
    ],
)
async def test_password_policy_is_enforced(store, password, message):
    with pytest.raises(ValidationError) as exc:
        await store.create("a@example.com", "Alice Example", password)

    assert any(message in error for error in exc.value.errors["password"])
    assert await store.find_by_email("a@example.com") is None


def test_relaxed_policy_skips_disabled_rules():
    policy = PasswordPolicy(min_length=4, require_non_alphanumeric=False, require_uppercase=False)

    assert validate_password("abc1", policy) == []
    assert validate_password("", policy) == ["Password is required"]


async def test_change_password_requires_current_password(store):
    user = await store.create("a@example.com", "Alice Example", PASSWORD)

    with pytest.raises(ValidationError) as exc:
        await store.update_password(user, "Wrong1234!", "Newpass123!")

    assert "current_password" in exc.value.errors
    assert store.verify_password(user, PASSWORD)


async def test_change_password_rotates_security_stamp(store):
    user = await store.create("a@example.com", "Alice Example", PASSWORD)
    stamp = user.security_stamp

    await store.update_password(user, PASSWORD, "Newpass123!")

    assert store.verify_password(user, "Newpass123!")
    assert user.security_stamp != stamp


async def test_change_password_applies_policy_to_new_password(store):
    user = await store.create("a@example.com", "Alice Example", PASSWORD)

    with pytest.raises(ValidationError) as exc:
        await store.update_password(user, PASSWORD, "short")

    assert "new_password" in exc.value.errors


async def test_email_change_requires_new_confirmation(store):
    user = await store.create("a@example.com", "Alice Example", PASSWORD, email_confirmed=True)

    changed = await store.update_profile(user, full_name="Alice Renamed", email="new@example.com")

    assert changed is True
    assert user.email == "new@example.com"
    assert user.full_name == "Alice Renamed"
    assert user.email_confirmed is False


async def test_same_email_in_other_case_is_not_a_change(store):
    user = await store.create("a@example.com", "Alice Example", PASSWORD, email_confirmed=True)

    changed = await store.update_profile(user, email="A@example.com")

    assert changed is False
    assert user.email_confirmed is True


async def test_email_change_to_taken_address_is_rejected(store):
    await store.create("taken@example.com", "Bob Example", PASSWORD)
    user = await store.create("a@example.com", "Alice Example", PASSWORD)

    with pytest.raises(ValidationError):
        await store.update_profile(user, email="taken@example.com")


async def test_add_to_role_is_idempotent(store):
    user = await store.create("a@example.com", "Alice Example", PASSWORD)

    await store.add_to_role(user, Role.ADMIN)
    await store.add_to_role(user, Role.ADMIN)

    assert await store.get_roles(user) == [Role.ADMIN, Role.USER]
