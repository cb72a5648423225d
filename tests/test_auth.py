# tests/test_auth.py
import pytest
from sqlalchemy import select

from schooldesk.models import Identity, User
from tests.conftest import PASSWORD
from tests.helpers import auth_headers

pytestmark = pytest.mark.anyio


def new_user(**overrides):
    body = {
        "firstName": "Nina",
        "lastName": "Newman",
        "email": "nina@school.org",
        "password": "hunter22",
        "role": "teacher",
    }
    body.update(overrides)
    return body


async def rows_for(session_factory, email):
    async with session_factory() as session:
        identity = (await session.execute(select(Identity).where(Identity.email == email))).scalar_one_or_none()
        profile = (await session.execute(select(User).where(User.email == email))).scalar_one_or_none()
        return identity, profile


class TestLogin:
    async def test_login_returns_token_and_user(self, client, seed):
        resp = await client.post("/api/auth/login", json={"email": "admin.a@school.org", "password": PASSWORD})

        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["user"]["id"] == seed.admin_a.id
        assert body["user"]["role"] == "school_admin"
        assert "access_token=" in resp.headers.get("set-cookie", "")

    async def test_wrong_password_is_401(self, client, seed):
        resp = await client.post("/api/auth/login", json={"email": "admin.a@school.org", "password": "nope-nope"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid email or password"}

    async def test_token_from_login_authenticates(self, client, seed):
        login = await client.post("/api/auth/login", json={"email": "teacher.a@school.org", "password": PASSWORD})
        token = login.json()["access_token"]

        resp = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        assert resp.json()["user"]["email"] == "teacher.a@school.org"


class TestMe:
    async def test_requires_authentication(self, client, seed):
        resp = await client.get("/api/auth/me")
        assert resp.status_code == 401
        assert "error" in resp.json()

    async def test_rejects_garbage_token(self, client, seed):
        resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    async def test_accepts_cookie_token(self, client, seed):
        token = auth_headers(seed.teacher_a)["Authorization"].split(" ", 1)[1]
        resp = await client.get("/api/auth/me", headers={"Cookie": f"access_token={token}"})
        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == seed.teacher_a.id

    async def test_responses_carry_request_id(self, client, seed, as_admin):
        resp = await client.get("/api/auth/me", headers=as_admin)
        assert resp.headers.get("X-Request-ID")


class TestRegister:
    async def test_super_admin_creates_user(self, client, seed, as_super, session_factory):
        body = new_user(role="school_admin", schoolId=seed.school_b.id)
        resp = await client.post("/api/auth/register", json=body, headers=as_super)

        assert resp.status_code == 201, resp.text
        data = resp.json()
        assert data["success"] is True
        user = data["user"]
        assert user["first_name"] == "Nina"
        assert user["last_name"] == "Newman"
        assert user["email"] == "nina@school.org"
        assert user["role"] == "school_admin"
        assert user["school_id"] == seed.school_b.id

        identity, profile = await rows_for(session_factory, "nina@school.org")
        assert identity is not None and profile is not None
        assert identity.id == profile.id

    async def test_new_user_can_log_in(self, client, seed, as_super):
        await client.post("/api/auth/register", json=new_user(schoolId=seed.school_a.id), headers=as_super)
        resp = await client.post("/api/auth/login", json={"email": "nina@school.org", "password": "hunter22"})
        assert resp.status_code == 200

    async def test_names_are_trimmed(self, client, seed, as_admin):
        body = new_user(firstName="  Nina ", lastName=" Newman  ")
        resp = await client.post("/api/auth/register", json=body, headers=as_admin)
        assert resp.status_code == 201
        assert resp.json()["user"]["first_name"] == "Nina"
        assert resp.json()["user"]["last_name"] == "Newman"

    async def test_missing_role_is_400(self, client, seed, as_super):
        body = new_user(schoolId=seed.school_a.id)
        del body["role"]
        resp = await client.post("/api/auth/register", json=body, headers=as_super)
        assert resp.status_code == 400
        assert resp.json() == {"error": "role is required"}

    async def test_invalid_role_is_400(self, client, seed, as_super):
        resp = await client.post(
            "/api/auth/register", json=new_user(role="janitor", schoolId=seed.school_a.id), headers=as_super
        )
        assert resp.status_code == 400
        assert "Invalid role" in resp.json()["error"]

    async def test_missing_field_is_named(self, client, seed, as_super):
        body = new_user()
        del body["firstName"]
        resp = await client.post("/api/auth/register", json=body, headers=as_super)
        assert resp.status_code == 400
        assert resp.json() == {"error": "firstName is required"}

    async def test_school_admin_defaults_to_own_school(self, client, seed, as_admin):
        resp = await client.post("/api/auth/register", json=new_user(), headers=as_admin)
        assert resp.status_code == 201
        assert resp.json()["user"]["school_id"] == seed.school_a.id

    async def test_school_admin_cannot_create_teacher_for_other_school(
        self, client, seed, as_admin, session_factory
    ):
        resp = await client.post(
            "/api/auth/register", json=new_user(schoolId=seed.school_b.id), headers=as_admin
        )
        assert resp.status_code == 403
        assert "error" in resp.json()
        assert await rows_for(session_factory, "nina@school.org") == (None, None)

    async def test_school_admin_cannot_create_admins(self, client, seed, as_admin, session_factory):
        resp = await client.post("/api/auth/register", json=new_user(role="school_admin"), headers=as_admin)
        assert resp.status_code == 403
        assert await rows_for(session_factory, "nina@school.org") == (None, None)

    async def test_teacher_cannot_create_users(self, client, seed, as_teacher, session_factory):
        resp = await client.post("/api/auth/register", json=new_user(), headers=as_teacher)
        assert resp.status_code == 403
        assert await rows_for(session_factory, "nina@school.org") == (None, None)

    async def test_teacher_is_refused_before_input_is_checked(self, client, seed, as_teacher):
        resp = await client.post("/api/auth/register", json=new_user(role=None), headers=as_teacher)
        assert resp.status_code == 403

    async def test_email_is_stored_lowercase(self, client, seed, as_super, session_factory):
        resp = await client.post(
            "/api/auth/register",
            json=new_user(email="Nina.Newman@School.org", schoolId=seed.school_a.id),
            headers=as_super,
        )

        assert resp.status_code == 201, resp.text
        assert resp.json()["user"]["email"] == "nina.newman@school.org"
        identity, profile = await rows_for(session_factory, "nina.newman@school.org")
        assert identity is not None and profile is not None
        login = await client.post(
            "/api/auth/login", json={"email": "NINA.NEWMAN@school.org", "password": "hunter22"}
        )
        assert login.status_code == 200

    async def test_unauthenticated_register_is_401(self, client, seed):
        resp = await client.post("/api/auth/register", json=new_user())
        assert resp.status_code == 401

    async def test_failed_profile_insert_removes_identity(self, client, seed, as_super, session_factory):
        # No such school: the identity is created, the profile insert fails
        resp = await client.post("/api/auth/register", json=new_user(schoolId=9999), headers=as_super)

        assert resp.status_code == 400
        assert "error" in resp.json()
        assert await rows_for(session_factory, "nina@school.org") == (None, None)

    async def test_duplicate_email_is_409(self, client, seed, as_super):
        resp = await client.post(
            "/api/auth/register",
            json=new_user(email="teacher.a@school.org", schoolId=seed.school_a.id),
            headers=as_super,
        )
        assert resp.status_code == 409


class TestUserRole:
    async def test_returns_role(self, client, seed, as_admin):
        resp = await client.get("/api/user/role", params={"userId": seed.teacher_a.id}, headers=as_admin)
        assert resp.status_code == 200
        assert resp.json() == {"role": "teacher"}

    async def test_user_id_is_required(self, client, seed, as_admin):
        resp = await client.get("/api/user/role", headers=as_admin)
        assert resp.status_code == 400
        assert resp.json() == {"error": "userId is required"}

    async def test_unknown_user_is_404(self, client, seed, as_super):
        resp = await client.get("/api/user/role", params={"userId": 4242}, headers=as_super)
        assert resp.status_code == 404

    async def test_teacher_reads_own_role_only(self, client, seed, as_teacher):
        own = await client.get("/api/user/role", params={"userId": seed.teacher_a.id}, headers=as_teacher)
        other = await client.get("/api/user/role", params={"userId": seed.teacher_a2.id}, headers=as_teacher)
        assert own.status_code == 200
        assert other.status_code == 403
