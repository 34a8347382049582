import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from src.adapter.services.bcrypt_secret_hasher import BcryptSecretHasher
from src.adapter.services.jwt_credential_signer import JwtCredentialSigner
from src.adapter.services.notifiers import LoggingNotifier, SmtpNotifier
from src.adapter.services.refresh_secret_generator import RefreshSecretGenerator
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.notifier import INotifier
from src.app.use_cases.auth.errors import BAD_REQUEST
from .error import ClientError, ServerError
from .middleware import log_requests

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_validation_error(request: Request, exc: RequestValidationError):
    error_dict = {"code": BAD_REQUEST, "message": "Invalid request payload"}
    # Locations only; field values may carry tokens
    logger.warning(f"Request validation failed: {[e['loc'] for e in exc.errors()]}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def build_notifier(ApplicationConfig) -> INotifier:
    if not ApplicationConfig.SMTP_HOST:
        logger.info("SMTP not configured, notifications will only be logged")
        return LoggingNotifier()
    return SmtpNotifier(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        username=ApplicationConfig.SMTP_USER,
        password=ApplicationConfig.SMTP_PASSWORD,
        from_email=ApplicationConfig.SMTP_FROM,
        use_tls=ApplicationConfig.SMTP_USE_TLS,
    )


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.depends import engine

        if ApplicationConfig.SESSION_STORE == "sql" and ApplicationConfig.AUTO_CREATE_SCHEMA:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        # Let in-flight notifications finish before the process exits
        await app.state.dispatcher.drain(ApplicationConfig.SHUTDOWN_TIMEOUT_SECONDS)
        await engine.dispose()

    app = FastAPI(title="Token Service", version="0.1.0", lifespan=lifespan)

    app.state.signer = JwtCredentialSigner(
        ApplicationConfig.JWT_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        ttl=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES),
    )
    app.state.generator = RefreshSecretGenerator(
        ttl=timedelta(hours=ApplicationConfig.REFRESH_TOKEN_TTL_HOURS)
    )
    app.state.hasher = BcryptSecretHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
    app.state.dispatcher = NotificationDispatcher(build_notifier(ApplicationConfig))
    app.state.notify_destination = ApplicationConfig.NOTIFY_EMAIL
    app.state.request_timeout = ApplicationConfig.REQUEST_TIMEOUT_SECONDS
    app.state.session_store = ApplicationConfig.SESSION_STORE

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from src.api.routes import auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
