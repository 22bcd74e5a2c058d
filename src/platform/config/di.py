"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.holidays.driven_adapter.notification.background_notification_dispatcher import (
    BackgroundNotificationDispatcher,
)
from src.service.holidays.driven_adapter.notification.mock_booking_notifier import (
    MockBookingNotifier,
)
from src.service.holidays.driven_adapter.notification.smtp_booking_notifier import (
    SmtpBookingNotifier,
)
from src.service.holidays.driven_adapter.payment.http_checkout_gateway import HttpCheckoutGateway
from src.service.holidays.driven_adapter.payment.mock_checkout_gateway import MockCheckoutGateway
from src.service.holidays.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
from src.service.holidays.driven_adapter.repo.in_memory_document_store import (
    InMemoryDocumentStore,
)
from src.service.holidays.driven_adapter.repo.sql_document_store import SqlDocumentStore
from src.service.holidays.driven_adapter.repo.tour_repo_impl import TourRepoImpl
from src.service.holidays.driven_adapter.repo.user_repo_impl import UserRepoImpl
from src.service.holidays.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.holidays.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (only touched when DOCUMENT_STORE=sql)
    database = providers.Singleton(
        Database,
        database_url=config_service.provided.DATABASE_URL,
        pool_pre_ping=config_service.provided.DB_POOL_PRE_PING,
    )

    # Background task group (set by main.py lifespan)
    # Used for fire-and-forget tasks like booking notifications
    task_group = providers.Object(None)

    # Document store
    document_store = providers.Selector(
        config_service.provided.DOCUMENT_STORE,
        memory=providers.Singleton(InMemoryDocumentStore),
        sql=providers.Singleton(SqlDocumentStore, session_factory=database.provided.session),
    )

    # Repositories (stateless over the document store)
    booking_repo = providers.Singleton(BookingRepoImpl, document_store=document_store)
    tour_repo = providers.Singleton(TourRepoImpl, document_store=document_store)
    user_repo = providers.Singleton(UserRepoImpl, document_store=document_store)

    # Auth service
    jwt_auth = providers.Singleton(
        JwtAuth,
        secret_key=config_service.provided.SECRET_KEY,
        algorithm=config_service.provided.ALGORITHM,
        expire_minutes=config_service.provided.ACCESS_TOKEN_EXPIRE_MINUTES,
        reset_expire_minutes=config_service.provided.PASSWORD_RESET_EXPIRE_MINUTES,
    )
    password_hasher = providers.Singleton(
        BcryptPasswordHasher, rounds=config_service.provided.BCRYPT_ROUNDS
    )

    # Booking notifications
    booking_notifier = providers.Selector(
        config_service.provided.MAIL_BACKEND,
        mock=providers.Singleton(MockBookingNotifier),
        smtp=providers.Singleton(
            SmtpBookingNotifier,
            host=config_service.provided.MAIL_HOST,
            port=config_service.provided.MAIL_PORT,
            username=config_service.provided.MAIL_USERNAME,
            password=config_service.provided.MAIL_PASSWORD,
            sender=config_service.provided.MAIL_FROM,
            use_tls=config_service.provided.MAIL_USE_TLS,
            timeout=config_service.provided.MAIL_TIMEOUT,
        ),
    )
    notification_dispatcher = providers.Singleton(
        BackgroundNotificationDispatcher,
        notifier=booking_notifier,
        task_group_provider=task_group.provider,
    )

    # Payment provider
    checkout_gateway = providers.Selector(
        config_service.provided.PAYMENT_BACKEND,
        mock=providers.Singleton(MockCheckoutGateway),
        http=providers.Singleton(
            HttpCheckoutGateway,
            api_base=config_service.provided.PAYMENT_API_BASE,
            api_key=config_service.provided.PAYMENT_API_KEY,
            timeout=config_service.provided.PAYMENT_TIMEOUT,
        ),
    )


container = Container()
