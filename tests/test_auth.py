def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_register_returns_token_and_user(client):
    r = client.post(
        "/auth/register",
        json={
            "name": "New Learner",
            "email": "New.Learner@Example.com",
            "password": "secret1",
        },
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "new.learner@example.com"
    assert body["user"]["role"] == "student"
    assert body["user"]["enrolled_course_ids"] == []
    assert "hashed_password" not in body["user"]


def test_register_as_instructor(client):
    r = client.post(
        "/auth/register",
        json={
            "name": "Course Author",
            "email": "teacher@example.com",
            "password": "secret1",
            "role": "instructor",
        },
    )
    assert r.status_code == 201, r.text
    assert r.json()["user"]["role"] == "instructor"


def test_register_duplicate_email_rejected(client):
    r = client.post(
        "/auth/register",
        json={"name": "Again", "email": "student1@example.com", "password": "secret1"},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert "already exists" in body["message"]


def test_register_validation_errors_are_field_level(client):
    r = client.post(
        "/auth/register",
        json={"name": "X", "email": "not-an-email", "password": "123", "role": "wizard"},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    fields = {e["field"] for e in body["errors"]}
    assert {"name", "email", "password", "role"} <= fields


def test_login_and_me(client):
    r = client.post(
        "/auth/login",
        json={"email": "student1@example.com", "password": "password123"},
    )
    assert r.status_code == 200, r.text
    token = r.json()["token"]

    r = client.get("/auth/me", headers=auth_header(token))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["email"] == "student1@example.com"
    assert data["role"] == "student"


def test_login_wrong_password(client):
    r = client.post(
        "/auth/login",
        json={"email": "student1@example.com", "password": "wrong-password"},
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


def test_login_unknown_email(client):
    r = client.post(
        "/auth/login",
        json={"email": "nobody@example.com", "password": "password123"},
    )
    assert r.status_code == 401


def test_login_deactivated_account(client):
    r = client.post(
        "/auth/login",
        json={"email": "inactive@example.com", "password": "password123"},
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Account is deactivated"


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401
    r = client.get("/auth/me", headers=auth_header("garbage.token.value"))
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_update_details(client, tokens):
    r = client.put(
        "/auth/updatedetails",
        headers=auth_header(tokens["student1"]),
        json={"name": "Renamed", "bio": "I like courses"},
    )
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["name"] == "Renamed"
    assert data["bio"] == "I like courses"
    assert data["email"] == "student1@example.com"


def test_update_details_email_taken(client, tokens):
    r = client.put(
        "/auth/updatedetails",
        headers=auth_header(tokens["student1"]),
        json={"email": "student2@example.com"},
    )
    assert r.status_code == 400


def test_update_password(client, tokens):
    r = client.put(
        "/auth/updatepassword",
        headers=auth_header(tokens["student1"]),
        json={"current_password": "wrong", "new_password": "newsecret"},
    )
    assert r.status_code == 401

    r = client.put(
        "/auth/updatepassword",
        headers=auth_header(tokens["student1"]),
        json={"current_password": "password123", "new_password": "newsecret"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["token"]

    r = client.post(
        "/auth/login",
        json={"email": "student1@example.com", "password": "newsecret"},
    )
    assert r.status_code == 200


def test_logout(client):
    r = client.get("/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": {}}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Route not found"}
