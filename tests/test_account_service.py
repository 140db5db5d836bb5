from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from moviehub.application.services.account_service import AccountStore, verify_password
from moviehub.core.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidEmailError,
    MissingFieldsError,
    WeakPasswordError,
)
from moviehub.domain.schemas.auth import UserRead
from moviehub.infrastructure.database import Base
from moviehub.infrastructure.repositories.memory_user_repository import InMemoryUserRepository
from moviehub.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


@pytest.fixture
def sql_session():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture(params=["memory", "database"])
def store(request, sql_session):
    if request.param == "memory":
        return AccountStore(InMemoryUserRepository())
    return AccountStore(SQLAlchemyUserRepository(sql_session))


def test_create_user_normalizes_and_returns_record(store):
    user = store.create_user("  Ann  ", "  Ann@X.com ", "secret1")

    assert user.name == "Ann"
    assert user.email == "ann@x.com"
    assert user.id
    assert user.created_at is not None


def test_password_is_stored_hashed(store):
    user = store.create_user("Ann", "ann@x.com", "secret1")

    assert user.password_hash != "secret1"
    assert verify_password("secret1", user.password_hash)


def test_ids_are_unique(store):
    first = store.create_user("Ann", "ann@x.com", "secret1")
    second = store.create_user("Bob", "bob@x.com", "secret2")

    assert first.id != second.id


def test_duplicate_email_is_rejected_case_insensitively(store):
    store.create_user("Ann", "Ann@X.com", "secret1")

    with pytest.raises(DuplicateUserError):
        store.create_user("Other Ann", " ann@x.COM", "another1")


@pytest.mark.parametrize(
    "name,email,password",
    [
        ("", "x@y.com", "longpass"),
        ("   ", "x@y.com", "longpass"),
        ("A", "", "longpass"),
        ("A", "x@y.com", ""),
        (None, "x@y.com", "longpass"),
        ("A", None, "longpass"),
        ("A", "x@y.com", None),
    ],
)
def test_missing_fields(store, name, email, password):
    with pytest.raises(MissingFieldsError) as exc:
        store.create_user(name, email, password)
    assert exc.value.message == "All fields are required"
    assert exc.value.status_code == 400


def test_weak_password():
    store = AccountStore(InMemoryUserRepository())
    with pytest.raises(WeakPasswordError):
        store.create_user("A", "x@y.com", "short")


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.com", "@c.com", "a@@c.com"])
def test_invalid_email(email):
    store = AccountStore(InMemoryUserRepository())
    with pytest.raises(InvalidEmailError):
        store.create_user("A", email, "longpass")


def test_email_checked_before_password():
    store = AccountStore(InMemoryUserRepository())
    with pytest.raises(InvalidEmailError):
        store.create_user("A", "not-an-email", "short")


def test_failed_signup_does_not_store_anything():
    repo = InMemoryUserRepository()
    store = AccountStore(repo)

    for args in [("A", "x@y.com", "short"), ("A", "bad", "longpass"), ("", "x@y.com", "longpass")]:
        with pytest.raises(Exception):
            store.create_user(*args)

    assert len(repo) == 0
    store.create_user("A", "x@y.com", "longpass")
    assert len(repo) == 1


def test_verify_credentials_is_case_insensitive_on_email(store):
    created = store.create_user("Ann", "Ann@X.com", "secret1")

    user = store.verify_credentials("ann@x.com", "secret1")

    assert user.id == created.id


def test_wrong_password_and_unknown_email_look_the_same(store):
    store.create_user("Ann", "Ann@X.com", "secret1")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        store.verify_credentials("ann@x.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        store.verify_credentials("nobody@x.com", "secret1")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"
    assert wrong_password.value.status_code == 401


def test_password_comparison_is_exact(store):
    store.create_user("Ann", "ann@x.com", "secret1")

    with pytest.raises(InvalidCredentialsError):
        store.verify_credentials("ann@x.com", "SECRET1")
    with pytest.raises(InvalidCredentialsError):
        store.verify_credentials("ann@x.com", "secret1 ")


@pytest.mark.parametrize("email,password", [("", "secret1"), ("ann@x.com", ""), (None, None)])
def test_verify_credentials_requires_both_fields(store, email, password):
    with pytest.raises(MissingFieldsError) as exc:
        store.verify_credentials(email, password)
    assert exc.value.message == "Email and password are required"


def test_public_user_created_at_is_utc_for_every_store(store):
    user = store.create_user("Ann", "ann@x.com", "secret1")

    public = UserRead.model_validate(user)

    assert public.created_at.utcoffset() == timedelta(0)
    created_at = public.model_dump(mode="json", by_alias=True)["createdAt"]
    assert created_at.endswith("Z") or created_at.endswith("+00:00")


def test_naive_created_at_is_read_as_utc():
    public = UserRead(id="abc", name="Ann", email="ann@x.com", createdAt=datetime(2024, 5, 1, 12, 30))

    assert public.created_at == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
