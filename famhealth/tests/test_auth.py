from famhealth.auth.jwt import create_access_token, create_refresh_token, hash_password, verify_password
from famhealth.models.user import User, UserProfile


def _register(client, email="new@example.com", password="secret123"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "name": "New"})


def test_password_hashing():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    # plain text is never accepted as a stored hash
    assert not verify_password("secret123", "secret123")


def test_register_creates_user_and_empty_profile(client, db):
    r = _register(client, email="New@Example.com")
    assert r.status_code == 201
    body = r.json()
    assert body["access_token"] and body["refresh_token"]
    user = db.query(User).filter(User.email == "new@example.com").one()
    profile = db.query(UserProfile).filter(UserProfile.user_id == user.id).one()
    assert profile.onboarding_completed is False


def test_register_duplicate_is_409(client):
    assert _register(client).status_code == 201
    r = _register(client)
    assert r.status_code == 409
    assert r.json()["code"] == "CONFLICT"


def test_register_short_password_is_422(client):
    assert _register(client, password="123").status_code == 422


def test_login_and_use_token(client, real_auth):
    _register(client)
    r = client.post("/api/auth/login", json={"email": "new@example.com", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    me = client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "New"


def test_login_wrong_password(client):
    _register(client)
    r = client.post("/api/auth/login", json={"email": "new@example.com", "password": "nope-nope"})
    assert r.status_code == 401


def test_missing_or_bad_token(client, real_auth):
    assert client.get("/api/profile").status_code == 401
    r = client.get("/api/profile", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_refresh_token_is_not_a_bearer_token(client, real_auth, db):
    _register(client)
    user = db.query(User).one()
    refresh = create_refresh_token({"sub": user.id})
    assert client.get("/api/profile", headers={"Authorization": f"Bearer {refresh}"}).status_code == 401

    r = client.post("/api/auth/refresh", json={"refresh_token": refresh})
    assert r.status_code == 200
    access = r.json()["access_token"]
    assert client.get("/api/profile", headers={"Authorization": f"Bearer {access}"}).status_code == 200


def test_refresh_rejects_access_token(client):
    token = create_access_token({"sub": "user-1"})
    assert client.post("/api/auth/refresh", json={"refresh_token": token}).status_code == 401


def test_token_for_deleted_user(client, real_auth):
    token = create_access_token({"sub": "ghost"})
    r = client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["message"] == "User not found"


def test_logout(client):
    assert client.post("/api/auth/logout").json() == {"status": "signed_out"}
