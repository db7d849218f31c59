import uuid
from datetime import timedelta

from sqlalchemy import delete

from tracker.api.deps import INVALID_TOKEN, MISSING_CREDENTIALS, PRINCIPAL_MISSING, SESSION_EXPIRED
from tracker.core.security import create_access_token
from tracker.models.user import User

from conftest import API, PASSWORD


async def _login(client, username):
    await client.post(
        f"{API}/users/register",
        json={"username": username, "email": f"{username}@mail.com", "password": PASSWORD},
    )
    resp = await client.post(f"{API}/users/login", json={"username": username, "password": PASSWORD})
    data = resp.json()["data"]
    return data["user"]["id"], data["accessToken"]


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestAuthenticationGate:
    async def test_missing_credentials(self, client):
        resp = await client.get(f"{API}/transactions")
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "message": MISSING_CREDENTIALS}
        assert resp.headers["www-authenticate"] == "Bearer"

    async def test_invalid_token(self, client):
        resp = await client.get(f"{API}/users/me", headers=_bearer("garbage"))
        assert resp.status_code == 401
        assert resp.json()["message"] == INVALID_TOKEN

    async def test_expired_token(self, make_client):
        client = make_client()
        user_id, _ = await _login(client, "alice")
        token = create_access_token(user_id, expires_delta=timedelta(seconds=-1))

        fresh = make_client()
        resp = await fresh.get(f"{API}/users/me", headers=_bearer(token))
        assert resp.status_code == 401
        assert resp.json()["message"] == SESSION_EXPIRED

    async def test_malformed_subject(self, client):
        token = create_access_token("not-a-uuid")
        resp = await client.get(f"{API}/users/me", headers=_bearer(token))
        assert resp.status_code == 401
        assert resp.json()["message"] == INVALID_TOKEN

    async def test_principal_missing(self, make_client, db):
        client = make_client()
        user_id, _ = await _login(client, "alice")
        await db.execute(delete(User).where(User.id == uuid.UUID(user_id)))
        await db.commit()

        resp = await client.get(f"{API}/users/me")
        assert resp.status_code == 401
        assert resp.json()["message"] == PRINCIPAL_MISSING

    async def test_bearer_header_fallback(self, make_client):
        _, token = await _login(make_client(), "alice")
        fresh = make_client()
        resp = await fresh.get(f"{API}/users/me", headers=_bearer(token))
        assert resp.status_code == 200
        assert resp.json()["data"]["username"] == "alice"

    async def test_cookie_checked_before_header(self, make_client):
        _, token = await _login(make_client(), "alice")

        fresh = make_client()
        resp = await fresh.get(
            f"{API}/users/me",
            headers={"Cookie": f"accessToken={token}", "Authorization": "Bearer garbage"},
        )
        assert resp.status_code == 200

        resp = await fresh.get(
            f"{API}/users/me",
            headers={"Cookie": "accessToken=garbage", **_bearer(token)},
        )
        assert resp.status_code == 401
        assert resp.json()["message"] == INVALID_TOKEN

    async def test_identity_routes_bypass_gate(self, client):
        resp = await client.post(
            f"{API}/users/register",
            json={"username": "open", "email": "open@mail.com", "password": "p"},
            headers=_bearer("garbage"),
        )
        assert resp.status_code == 201
