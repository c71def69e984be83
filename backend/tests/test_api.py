from unittest.mock import patch

from fastapi.testclient import TestClient

from passlab.errors import StoreError
from passlab.main import create_app
from passlab.services import accounts


def test_signup(client: TestClient):
    response = client.post(
        "/api/signup",
        json={"username": "alice", "password": "correct-horse"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"]
    assert data["user"] == {"id": 1, "username": "alice"}
    assert "correct-horse" not in response.text


def test_signup_missing_fields(client: TestClient):
    response = client.post("/api/signup", json={"username": "alice"})
    assert response.status_code == 400
    assert response.json() == {"error": "Username and password required!"}

    response = client.post("/api/signup", json={"username": "", "password": "x"})
    assert response.status_code == 400


def test_signup_malformed_body(client: TestClient):
    response = client.post(
        "/api/signup",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_signup_duplicate(client: TestClient, alice: dict):
    response = client.post(
        "/api/signup",
        json={"username": "alice", "password": "something-else"},
    )
    assert response.status_code == 409
    assert response.json() == {"error": "Username already exists!"}


def test_login_success(client: TestClient, alice: dict):
    response = client.post(
        "/api/login",
        json={"username": "alice", "password": "correct-horse"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "alice"
    assert data["message"]
    assert "password_hash" not in data


def test_login_failures_share_payload(client: TestClient, alice: dict):
    wrong_password = client.post(
        "/api/login",
        json={"username": "alice", "password": "wrong"},
    )
    unknown_user = client.post(
        "/api/login",
        json={"username": "nobody", "password": "correct-horse"},
    )
    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == {"error": "Invalid credentials!"}
    assert unknown_user.json() == wrong_password.json()


def test_login_missing_fields(client: TestClient):
    response = client.post("/api/login", json={"password": "x"})
    assert response.status_code == 400


def test_login_corrupt_digest_is_500(client: TestClient, store):
    store.add_account("mallory", "garbage")
    response = client.post(
        "/api/login",
        json={"username": "mallory", "password": "anything"},
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}


def test_admin_hashes(client: TestClient):
    for name in ("first", "second"):
        client.post("/api/signup", json={"username": name, "password": f"pw-{name}"})

    response = client.get("/api/admin/hashes")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    page = response.text
    assert "Total users: 2" in page
    assert page.index("second") < page.index("first")
    assert "$2b$" in page
    assert "pw-first" not in page


def test_admin_hashes_escapes_usernames(client: TestClient):
    client.post("/api/signup", json={"username": "<b>x</b>", "password": "pw"})
    page = client.get("/api/admin/hashes").text
    assert "&lt;b&gt;x&lt;/b&gt;" in page


def test_admin_hashes_store_error(client: TestClient, store):
    with patch.object(store, "list_accounts", side_effect=StoreError("boom")):
        response = client.get("/api/admin/hashes")
    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}


def test_index_page(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert "/api/admin/hashes" in response.text


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}


def test_unexpected_error_is_json_500(store):
    with TestClient(create_app(store), raise_server_exceptions=False) as client:
        with patch.object(store, "list_accounts", side_effect=RuntimeError("boom")):
            response = client.get("/api/admin/hashes")
    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}


def test_dummy_digest_built_at_startup(client: TestClient):
    assert accounts._dummy_digest.cache_info().currsize == 1
    assert accounts._dummy_digest().startswith("$2b$04$")
