from fastapi.testclient import TestClient

from tests.conftest import InMemoryStore


def register(client: TestClient, email: str = "Admin@Example.com", password: str = "s3cret-pass"):
    return client.post("/api/auth/register-admin", json={"email": email, "password": password})


def test_register_admin_stores_lower_cased_email(client: TestClient, store: InMemoryStore) -> None:
    response = register(client)

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["email"] == "admin@example.com"
    assert set(user) == {"id", "email"}
    stored = store.tables["admin_users"][0]
    assert stored["password_hash"] != "s3cret-pass"
    assert stored["password_hash"].startswith("$2")


def test_register_admin_requires_email_and_password(client: TestClient, store: InMemoryStore) -> None:
    response = client.post("/api/auth/register-admin", json={"email": "a@b.co"})

    assert response.status_code == 400
    assert response.json() == {"error": "email and password are required"}
    assert store.tables["admin_users"] == []


def test_register_admin_rejects_malformed_email(client: TestClient, store: InMemoryStore) -> None:
    response = register(client, email="not-an-email")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email format"}
    assert store.tables["admin_users"] == []


def test_duplicate_admin_email_is_a_conflict_regardless_of_case(client: TestClient) -> None:
    assert register(client, email="ops@example.com").status_code == 201

    response = register(client, email="OPS@example.com")

    assert response.status_code == 409
    assert response.json() == {"error": "Email already exists"}


def test_login_returns_identity_only(client: TestClient) -> None:
    admin_id = register(client).json()["user"]["id"]

    response = client.post("/api/auth/login-admin", json={"email": "ADMIN@example.com", "password": "s3cret-pass"})

    assert response.status_code == 200
    assert response.json() == {"user": {"id": admin_id, "email": "admin@example.com"}}


def test_wrong_password_and_unknown_email_are_indistinguishable(client: TestClient) -> None:
    register(client)

    wrong_password = client.post("/api/auth/login-admin", json={"email": "admin@example.com", "password": "nope"})
    unknown_email = client.post("/api/auth/login-admin", json={"email": "ghost@example.com", "password": "nope"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_login_requires_both_fields(client: TestClient) -> None:
    response = client.post("/api/auth/login-admin", json={"password": "x"})

    assert response.status_code == 400
    assert response.json() == {"error": "email and password are required"}


def test_register_admin_rejects_consecutive_dots(client: TestClient, store: InMemoryStore) -> None:
    response = register(client, email="john..doe@example.com")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email format"}
    assert store.tables["admin_users"] == []
