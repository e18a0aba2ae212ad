"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.driven_adapter.guard.showtime_lock_guard import ShowtimeLockGuard
from src.service.cinema.driven_adapter.repo.movie_command_repo_impl import MovieCommandRepoImpl
from src.service.cinema.driven_adapter.repo.movie_query_repo_impl import MovieQueryRepoImpl
from src.service.cinema.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.cinema.driven_adapter.repo.showtime_query_repo_impl import (
    ShowtimeQueryRepoImpl,
)
from src.service.cinema.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.cinema.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.cinema.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager, one engine per event loop)
    database = providers.Singleton(Database)

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Repositories (stateless - use session_factory per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )
    movie_command_repo = providers.Singleton(
        MovieCommandRepoImpl, session_factory=database.provided.session
    )
    movie_query_repo = providers.Singleton(
        MovieQueryRepoImpl, session_factory=database.provided.session
    )
    showtime_query_repo = providers.Singleton(
        ShowtimeQueryRepoImpl, session_factory=database.provided.session
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )

    # Showtime guard: one lock table per process, shared by every request
    showtime_guard = providers.Singleton(
        ShowtimeLockGuard,
        timeout_seconds=config_service.provided.SHOWTIME_GUARD_TIMEOUT_SECONDS,
    )

    # Unit of work: a new instance (and session) per transaction
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork,
        session_factory=database.provided.session,
        lock_timeout_seconds=config_service.provided.SHOWTIME_GUARD_TIMEOUT_SECONDS,
    )


container = Container()