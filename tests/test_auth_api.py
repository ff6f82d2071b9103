from app.core import messages
from conftest import API, auth, me, register


def test_register_returns_working_token(client):
    token = register(client, "alice", "alice@example.com", "secret1")

    user = me(client, token)
    assert user["username"] == "alice"
    assert user["email"] == "alice@example.com"
    assert user["role"] == "user"
    assert user["prompts"] == []
    assert user["savedPrompts"] == []
    assert "password" not in user
    assert "passwordHash" not in user


def test_login_with_registered_credentials(client):
    register(client, "alice", "alice@example.com", "secret1")

    response = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "secret1"})

    assert response.status_code == 200
    assert me(client, response.json()["token"])["username"] == "alice"


def test_login_email_is_case_insensitive(client):
    register(client, "alice", "alice@example.com", "secret1")

    response = client.post(f"{API}/auth/login", json={"email": "Alice@Example.COM", "password": "secret1"})

    assert response.status_code == 200


def test_login_failures_share_one_message(client):
    register(client, "alice", "alice@example.com", "secret1")

    wrong_password = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "secret2"})
    unknown_email = client.post(f"{API}/auth/login", json={"email": "nobody@example.com", "password": "secret1"})

    assert wrong_password.status_code == 400
    assert unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"message": messages.AUTH_INVALID_CREDENTIALS}


def test_duplicate_email_with_different_casing_conflicts(client):
    register(client, "alice", "alice@example.com", "secret1")

    response = client.post(
        f"{API}/auth/register",
        json={"username": "alice2", "email": "ALICE@example.com", "password": "secret1"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == messages.REG_EMAIL_EXISTS


def test_duplicate_username_conflicts(client):
    register(client, "alice", "alice@example.com", "secret1")

    response = client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "other@example.com", "password": "secret1"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == messages.REG_USERNAME_EXISTS


def test_short_password_is_rejected(client):
    response = client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "12345"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == messages.REG_PASSWORD_TOO_SHORT.format(min_length=6)


def test_invalid_email_is_a_validation_error(client):
    response = client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "not-an-email", "password": "secret1"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == messages.VALIDATION_FAILED
    assert response.json()["errors"]


def test_me_requires_token(client):
    response = client.get(f"{API}/auth/me")

    assert response.status_code == 401
    assert response.json() == {"message": messages.AUTH_TOKEN_MISSING}


def test_me_rejects_invalid_token(client):
    response = client.get(f"{API}/auth/me", headers=auth("not-a-token"))

    assert response.status_code == 401
    assert response.json() == {"message": messages.AUTH_TOKEN_INVALID}


def test_password_is_stored_hashed(client, db):
    from app.models.user import User

    register(client, "alice", "alice@example.com", "secret1")

    user = db.query(User).filter(User.username == "alice").one()
    assert user.password_hash != "secret1"
    assert user.password_hash.startswith("$2")


def test_single_character_password_mutations_fail(client):
    register(client, "alice", "alice@example.com", "secret1")

    for mutated in ("secret2", "Secret1", "secret", "secret12", "xecret1"):
        response = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": mutated})
        assert response.status_code == 400, mutated


def test_password_longer_than_bcrypt_limit_is_rejected(client):
    response = client.post(
        f"{API}/auth/register",
        json={"username": "alice", "email": "alice@example.com", "password": "a" * 80},
    )

    assert response.status_code == 400
    assert response.json() == {"message": messages.REG_PASSWORD_TOO_LONG.format(max_bytes=72)}


def test_change_past_byte_72_does_not_log_in(client):
    password = "a" * 72
    register(client, "alice", "alice@example.com", password)

    ok = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": password})
    longer = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": password + "b"})

    assert ok.status_code == 200
    assert longer.status_code == 400
    assert longer.json() == {"message": messages.AUTH_INVALID_CREDENTIALS}
