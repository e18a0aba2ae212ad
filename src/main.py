"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.user_query_use_case import UserUseCase


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Movie Reservation] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Movie Reservation] Dependency injection wired')

    if settings.CREATE_TABLES_ON_STARTUP:
        await create_db_and_tables()

    if settings.SEED_ADMIN_EMAIL and settings.SEED_ADMIN_PASSWORD:
        await seed_admin(
            email=settings.SEED_ADMIN_EMAIL,
            password=settings.SEED_ADMIN_PASSWORD.get_secret_value(),
            name=settings.SEED_ADMIN_NAME,
        )

    Logger.base.info('✅ [Movie Reservation] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Movie Reservation] Shutting down...')
    await dispose_engine()
    Logger.base.info('🗄️  [Movie Reservation] Database engine disposed')

    container.unwire()
    Logger.base.info('👋 [Movie Reservation] Shutdown complete')


async def seed_admin(*, email: str, password: str, name: str) -> None:
    use_case = UserUseCase(
        user_command_repo=container.user_command_repo(),
        user_query_repo=container.user_query_repo(),
        password_hasher=container.password_hasher(),
    )
    await use_case.ensure_seed_admin(email=email, password=password, name=name)


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
