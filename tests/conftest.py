# tests/conftest.py
import os
from types import SimpleNamespace

# Settings are read at import time, so configure them before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import AsyncClient, ASGITransport

from schooldesk import create_app
from schooldesk.core.database import build_engine, build_session_factory, get_db, init_db
from schooldesk.core.security import get_password_hash
from schooldesk.models import Identity, School, User
from schooldesk.schemas.user.role import UserRoleEnum
from tests.helpers import auth_headers

PASSWORD = "secret123"


# Make anyio run on asyncio (so our async fixtures work everywhere)
@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'schooldesk.db'}")
    # ASGITransport does not run startup hooks
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def app(session_factory):
    application = create_app()

    async def override_get_db():
        session = session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


async def make_user(session, email, role, school_id=None, first_name="Test", last_name="User"):
    """Insert an identity and its profile directly"""
    identity = Identity(email=email, password_hash=get_password_hash(PASSWORD))
    session.add(identity)
    await session.flush()
    user = User(
        id=identity.id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        school_id=school_id,
    )
    session.add(user)
    await session.flush()
    return user


@pytest.fixture
async def seed(session_factory):
    """
    Two schools and one account per role.

    School A has an admin and two teachers; school B has one teacher.
    """
    async with session_factory() as session:
        school_a = School(name="Northside High", address="1 North Rd")
        school_b = School(name="Southside Academy")
        session.add_all([school_a, school_b])
        await session.flush()

        super_admin = await make_user(
            session, "root@example.com", UserRoleEnum.SUPER_ADMIN, None, "Root", "Admin"
        )
        admin_a = await make_user(
            session, "admin.a@school.org", UserRoleEnum.SCHOOL_ADMIN, school_a.id, "Alma", "Admin"
        )
        teacher_a = await make_user(
            session, "teacher.a@school.org", UserRoleEnum.TEACHER, school_a.id, "Tara", "Teach"
        )
        teacher_a2 = await make_user(
            session, "teacher.a2@school.org", UserRoleEnum.TEACHER, school_a.id, "Theo", "Tutor"
        )
        teacher_b = await make_user(
            session, "teacher.b@school.org", UserRoleEnum.TEACHER, school_b.id, "Bea", "Board"
        )
        await session.commit()

        return SimpleNamespace(
            school_a=school_a,
            school_b=school_b,
            super_admin=super_admin,
            admin_a=admin_a,
            teacher_a=teacher_a,
            teacher_a2=teacher_a2,
            teacher_b=teacher_b,
        )



@pytest.fixture
def as_super(seed):
    return auth_headers(seed.super_admin)


@pytest.fixture
def as_admin(seed):
    return auth_headers(seed.admin_a)


@pytest.fixture
def as_teacher(seed):
    return auth_headers(seed.teacher_a)
