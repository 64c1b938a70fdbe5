import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from jobly.auth import authenticate_token
from jobly.dependencies import require_admin_or_owner
from jobly.errors import ForbiddenError


class TestAuthRoutes:
    def test_token_for_valid_login(self, client):
        r = client.post("/api/v1/auth/token", json={"username": "u1", "password": "password1"})
        assert r.status_code == 200
        identity = authenticate_token(f"Bearer {r.json()['token']}")
        assert identity.username == "u1"
        assert identity.is_admin is False

    def test_token_carries_admin_flag(self, client):
        r = client.post("/api/v1/auth/token", json={"username": "admin", "password": "adminpass"})
        assert authenticate_token(f"Bearer {r.json()['token']}").is_admin is True

    def test_token_wrong_password(self, client):
        r = client.post("/api/v1/auth/token", json={"username": "u1", "password": "nope"})
        assert r.status_code == 401
        assert r.json()["error"]["message"] == "Invalid username/password"

    def test_token_unknown_user(self, client):
        r = client.post("/api/v1/auth/token", json={"username": "ghost", "password": "password1"})
        assert r.status_code == 401

    def test_register(self, client):
        r = client.post("/api/v1/auth/register", json={
            "username": "new",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "new@email.com",
        })
        assert r.status_code == 201
        identity = authenticate_token(f"Bearer {r.json()['token']}")
        assert identity.username == "new"
        assert identity.is_admin is False

    def test_register_cannot_claim_admin(self, client):
        r = client.post("/api/v1/auth/register", json={
            "username": "sneaky",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "sneaky@email.com",
            "isAdmin": True,
        })
        assert r.status_code == 400

    def test_register_duplicate(self, client):
        r = client.post("/api/v1/auth/register", json={
            "username": "u1",
            "password": "password",
            "firstName": "First",
            "lastName": "Last",
            "email": "u1@email.com",
        })
        assert r.status_code == 400
        assert r.json()["error"]["message"] == "Duplicate username: u1"


class TestUserRoutes:
    def _auth(self, token):
        return {"Authorization": f"Bearer {token}"}

    def _new_user(self, **extra):
        return {
            "username": "u-new",
            "firstName": "First-new",
            "lastName": "Last-newL",
            "password": "password-new",
            "email": "new@email.com",
            **extra,
        }

    def test_admin_creates_admin(self, client, admin_token):
        r = client.post("/api/v1/users", json=self._new_user(isAdmin=True),
                        headers=self._auth(admin_token))
        assert r.status_code == 201
        data = r.json()
        assert data["user"] == {
            "username": "u-new",
            "firstName": "First-new",
            "lastName": "Last-newL",
            "email": "new@email.com",
            "isAdmin": True,
        }
        assert authenticate_token(f"Bearer {data['token']}").is_admin is True

    def test_non_admin_cannot_create(self, client, u1_token):
        r = client.post("/api/v1/users", json=self._new_user(), headers=self._auth(u1_token))
        assert r.status_code == 403

    def test_anonymous_cannot_create(self, client):
        r = client.post("/api/v1/users", json=self._new_user())
        assert r.status_code == 401

    def test_owner_can_read_self(self, client, u1_token):
        r = client.get("/api/v1/users/u1", headers=self._auth(u1_token))
        assert r.status_code == 200
        assert r.json()["user"]["username"] == "u1"
        assert r.json()["user"]["isAdmin"] is False

    def test_admin_can_read_anyone(self, client, admin_token):
        r = client.get("/api/v1/users/u1", headers=self._auth(admin_token))
        assert r.status_code == 200

    def test_other_user_forbidden(self, client, u1_token):
        r = client.get("/api/v1/users/admin", headers=self._auth(u1_token))
        assert r.status_code == 403

    def test_anonymous_forbidden(self, client):
        r = client.get("/api/v1/users/u1")
        assert r.status_code == 403

    def test_admin_gets_404_for_missing_user(self, client, admin_token):
        r = client.get("/api/v1/users/ghost", headers=self._auth(admin_token))
        assert r.status_code == 404

    def test_owner_deletes_self(self, client, u1_token, admin_token):
        r = client.delete("/api/v1/users/u1", headers=self._auth(u1_token))
        assert r.status_code == 200
        assert r.json() == {"deleted": "u1"}

        r = client.get("/api/v1/users/u1", headers=self._auth(admin_token))
        assert r.status_code == 404

    def test_other_user_cannot_delete(self, client, u1_token):
        r = client.delete("/api/v1/users/admin", headers=self._auth(u1_token))
        assert r.status_code == 403


owned_app = FastAPI()


@owned_app.get("/owned", dependencies=[Depends(require_admin_or_owner)])
async def owned_by_query():
    return {"ok": True}


@owned_app.get("/owned/{username}", dependencies=[Depends(require_admin_or_owner)])
async def owned_by_path(username: str):
    return {"ok": True}


class TestOwnerSource:
    def _auth(self, token):
        return {"Authorization": f"Bearer {token}"}

    def test_owner_from_query_string(self, u1_token):
        client = TestClient(owned_app)
        r = client.get("/owned", params={"username": "u1"}, headers=self._auth(u1_token))
        assert r.status_code == 200

    def test_query_owner_mismatch_forbidden(self, u1_token):
        client = TestClient(owned_app)
        with pytest.raises(ForbiddenError):
            client.get("/owned", params={"username": "admin"}, headers=self._auth(u1_token))

    def test_no_owner_anywhere_forbidden(self, u1_token):
        client = TestClient(owned_app)
        with pytest.raises(ForbiddenError):
            client.get("/owned", headers=self._auth(u1_token))

    def test_path_owner_wins_over_query(self, u1_token):
        client = TestClient(owned_app)
        with pytest.raises(ForbiddenError):
            client.get("/owned/admin", params={"username": "u1"}, headers=self._auth(u1_token))
        r = client.get("/owned/u1", params={"username": "admin"}, headers=self._auth(u1_token))
        assert r.status_code == 200
