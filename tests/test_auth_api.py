# Test account registration, login and token handling

from storefront.core.config import Settings
from storefront.database.users import hash_password, verify_password
from storefront.security.auth import issue_token

TEST_PASSWORD = "woof-woof-123"


class TestPasswordHashing:

    def test_hash_roundtrip(self):
        """Stored hash verifies the same password only"""
        stored = hash_password("kibble-lover")
        assert "." in stored
        assert verify_password("kibble-lover", stored)
        assert not verify_password("kibble-hater", stored)

    def test_hash_is_salted(self):
        """Same password hashes differently each time"""
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash_rejected(self):
        assert not verify_password("anything", "not-a-hash")


class TestAuthRoutes:

    def test_register_returns_user_and_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "New@Example.com", "password": "secret1", "fullName": "New User"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "new@example.com"
        assert data["user"]["fullName"] == "New User"
        assert data["user"]["role"] == "customer"
        assert "_id" in data["user"]
        assert data["token"]
        assert "password_hash" not in data["user"]

    def test_duplicate_email_rejected(self, client, registered_user):
        response = client.post(
            "/api/auth/register",
            json={"email": "shopper@example.com", "password": "another1"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Email is already registered"

    def test_short_password_rejected(self, client):
        response = client.post("/api/auth/register", json={"email": "a@b.co", "password": "123"})
        assert response.status_code == 422

    def test_login(self, client, registered_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "shopper@example.com", "password": TEST_PASSWORD},
        )
        assert response.status_code == 200
        assert response.json()["user"]["_id"] == registered_user[0]["_id"]

    def test_login_wrong_password(self, client, registered_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "shopper@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_current_user(self, client, registered_user, auth_headers):
        response = client.get("/api/auth/user", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "shopper@example.com"

    def test_current_user_requires_token(self, client):
        assert client.get("/api/auth/user").status_code == 401

    def test_garbage_token_is_anonymous(self, client):
        """An invalid token is treated as no token, not a server error"""
        response = client.get("/api/auth/user", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401

    def test_logout_revokes_token(self, client, auth_headers):
        assert client.post("/api/auth/logout", headers=auth_headers).status_code == 200
        assert client.get("/api/auth/user", headers=auth_headers).status_code == 401

    def test_token_from_other_secret_rejected(self, client, registered_user, db):
        user = db.users.get_by_email("shopper@example.com")
        token, _ = issue_token(user, Settings(secret_key="some-other-secret"))

        response = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_index_lists_endpoints(self, client):
        assert "wishlist" in client.get("/").json()["endpoints"]
