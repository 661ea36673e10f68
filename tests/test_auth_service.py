import pytest
from sqlalchemy import false

from auth import service
from core.errors import AuthError, ConflictError, ValidationError
from core.security import issue_access_token
from models.user import User


def test_signup_stores_hash_not_plaintext(db):
    user = service.signup(db, "alice", "a@x.com", "secret1")

    stored = db.query(User).filter(User.id == user.id).one()
    assert stored.username == "alice"
    assert stored.email == "a@x.com"
    assert stored.password_hash != "secret1"
    assert stored.created_at is not None


@pytest.mark.parametrize(
    "username, email",
    [
        ("alice", "other@x.com"),
        ("someone", "a@x.com"),
        ("alice", "a@x.com"),
    ],
)
def test_signup_duplicate_username_or_email_conflicts(db, alice, username, email):
    with pytest.raises(ConflictError):
        service.signup(db, username, email, "whatever1")

    assert db.query(User).count() == 1


@pytest.mark.parametrize(
    "username, email, password, field",
    [
        ("", "a@x.com", "secret1", "username"),
        ("u" * 51, "a@x.com", "secret1", "username"),
        ("alice", "", "secret1", "email"),
        ("alice", "e" * 101, "secret1", "email"),
        ("alice", "a@x.com", "12345", "password"),
    ],
)
def test_signup_length_violations(db, username, email, password, field):
    with pytest.raises(ValidationError) as excinfo:
        service.signup(db, username, email, password)

    assert [e["field"] for e in excinfo.value.errors] == [field]
    assert db.query(User).count() == 0


def test_signup_accepts_boundary_lengths(db):
    user = service.signup(db, "u" * 50, "e" * 100, "secret")
    assert user.id is not None


@pytest.mark.parametrize("identifier", ["alice", "a@x.com"])
def test_login_by_username_or_email(db, alice, identifier):
    user, token = service.login(db, identifier, "secret1")

    assert user.id == alice.id
    assert service.authenticate(db, token.value).id == alice.id


def test_login_failures_are_indistinguishable(db, alice):
    with pytest.raises(AuthError) as wrong_password:
        service.login(db, "alice", "secret2")
    with pytest.raises(AuthError) as unknown_user:
        service.login(db, "nobody", "secret1")

    assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


@pytest.mark.parametrize("token", [None, ""])
def test_authenticate_missing_token(db, token):
    with pytest.raises(AuthError, match="Access token required"):
        service.authenticate(db, token)


def test_authenticate_invalid_token(db):
    with pytest.raises(AuthError, match="Invalid or expired token"):
        service.authenticate(db, "abc.def.ghi")


def test_authenticate_rejects_deleted_user(db, alice):
    _, token = service.login(db, "alice", "secret1")

    db.delete(alice)
    db.commit()

    with pytest.raises(AuthError, match="User not found"):
        service.authenticate(db, token.value)


def test_authenticate_unknown_user_id(db):
    token = issue_access_token(9999)

    with pytest.raises(AuthError, match="User not found"):
        service.authenticate(db, token.value)


def test_authenticate_returns_current_row(db, alice):
    _, token = service.login(db, "alice", "secret1")

    alice.email = "alice@new.example"
    db.commit()

    assert service.authenticate(db, token.value).email == "alice@new.example"


def test_signup_race_on_unique_index_conflicts(db, alice, monkeypatch):
    # A concurrent signup commits between the pre-check and the insert
    monkeypatch.setattr(service, "or_", lambda *clauses: false())

    with pytest.raises(ConflictError, match="Username or email already exists"):
        service.signup(db, "alice", "other@x.com", "whatever1")

    # The session was rolled back and is usable again
    assert db.query(User).count() == 1
    carol = service.signup(db, "carol", "c@x.com", "secret1")
    assert carol.id is not None
