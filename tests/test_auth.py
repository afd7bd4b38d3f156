from leaguehub.config import SESSION_COOKIE_NAME
from leaguehub.services.auth import hash_password, verify_password


def test_password_hashing():
    password = "secure_password_123"
    hashed = hash_password(password)

    assert hashed != password
    assert verify_password(password, hashed) is True
    assert verify_password("wrong_password", hashed) is False


def test_password_long_truncation():
    # bcrypt only looks at the first 72 bytes
    long_password = "a" * 100
    hashed = hash_password(long_password)

    assert verify_password(long_password, hashed) is True
    assert verify_password("a" * 72, hashed) is True
    assert verify_password("b" * 72, hashed) is False


def test_register_sets_session_cookie(client):
    response = client.post(
        "/auth/register",
        json={"email": "new@example.com", "password": "password123", "display_name": "Newbie"}
    )
    assert response.status_code == 201
    assert response.json()["display_name"] == "Newbie"
    assert SESSION_COOKIE_NAME in response.cookies

    me = client.get("/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"


def test_register_duplicate_email(client, user):
    response = client.post(
        "/auth/register",
        json={"email": user.email, "password": "password123", "display_name": "Copy"}
    )
    assert response.status_code == 400


def test_login_and_logout(client, user):
    response = client.post("/auth/login", json={"email": user.email, "password": "password123"})
    assert response.status_code == 200
    assert client.get("/auth/me").status_code == 200

    client.post("/auth/logout")
    client.cookies.clear()
    assert client.get("/auth/me").status_code == 401


def test_login_wrong_password(client, user):
    response = client.post("/auth/login", json={"email": user.email, "password": "nope"})
    assert response.status_code == 401


def test_unknown_session_token(client):
    client.cookies.set(SESSION_COOKIE_NAME, "not-a-real-token")
    assert client.get("/leagues").status_code == 401
