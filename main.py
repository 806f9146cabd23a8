from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fanout.config import Settings, get_settings
from fanout.infrastructure.database import engine, initialize_database
from fanout.infrastructure.push_gateway import ExpoPushGateway, PushGateway
from fanout.infrastructure.rate_limiter import RateLimiter
from fanout.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup and release the clients on shutdown."""

    initialize_database()
    yield
    close = getattr(app.state.push_gateway, "close", None)
    if callable(close):
        close()
    engine.dispose()


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(
    *,
    settings: Settings | None = None,
    rate_limiter: RateLimiter | None = None,
    push_gateway: PushGateway | None = None,
) -> FastAPI:
    """Build the FastAPI application and its process wide collaborators."""

    settings = settings or get_settings()

    app = FastAPI(title="fanout", lifespan=lifespan)
    app.state.settings = settings
    app.state.rate_limiter = rate_limiter or RateLimiter(
        max_calls=settings.rate_limit_max_calls,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.state.push_gateway = push_gateway or ExpoPushGateway.from_settings(settings)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    register_routes(app)
    return app


app = create_app()
