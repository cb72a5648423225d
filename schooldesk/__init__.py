# schooldesk/__init__.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import select

from .core.config import settings
from .core.database import close_db, get_db_context, init_db
from .core.errors import register_exception_handlers
from .core.logging import logger
from .core.security import get_password_hash
from .middleware.request_id import RequestIDMiddleware
from .models import Identity, User
from .routes import attendance, auth, classes, grades, overview, schools, students, teachers, users
from .schemas.user.role import UserRoleEnum


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="API for managing schools, classes, student rosters, attendance and grades",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(schools.router, prefix="/api")
    app.include_router(classes.router, prefix="/api")
    app.include_router(students.router, prefix="/api")
    app.include_router(teachers.router, prefix="/api")
    app.include_router(attendance.router, prefix="/api")
    app.include_router(grades.router, prefix="/api")
    app.include_router(overview.router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        await init_db()
        await create_super_admin()
        logger.info("Application startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        await close_db()
        logger.info("Application shutdown completed")

    return app


async def create_super_admin() -> None:
    """Create the configured super admin login and profile if it is missing"""
    if not settings.SUPER_ADMIN_EMAIL or not settings.SUPER_ADMIN_PASSWORD:
        logger.info("No super admin configured; skipping bootstrap")
        return

    email = str(settings.SUPER_ADMIN_EMAIL).lower()
    async with get_db_context() as db:
        result = await db.execute(select(Identity).where(Identity.email == email))
        if result.scalar_one_or_none():
            logger.info("Super admin already exists")
            return

        identity = Identity(
            email=email,
            password_hash=get_password_hash(settings.SUPER_ADMIN_PASSWORD),
            email_confirmed=True
        )
        db.add(identity)
        await db.flush()
        db.add(User(
            id=identity.id,
            email=email,
            first_name="Super",
            last_name="Admin",
            role=UserRoleEnum.SUPER_ADMIN,
            school_id=None
        ))
    logger.info("Super admin created successfully")
