from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import CORS_ORIGINS
from core.db import engine
from core.logging import get_logger, setup_logging
from exceptions import domain_exception_handler, http_exception_handler, validation_exception_handler
from middleware.rate_limit import custom_rate_limit_exceeded, limiter
from resolvers.schema import graphql_router
from routers import auto, auto_write, health, metrics
from services.exceptions import AutoDomainError

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Auto service started")
    try:
        yield
    finally:
        # teardown on shutdown
        await engine.dispose()
        logger.info("Auto service stopped")


app = FastAPI(title="Auto API", version="1.0.0", lifespan=lifespan)

# Register exception handlers
app.add_exception_handler(AutoDomainError, domain_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, custom_rate_limit_exceeded)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],   # Allows POST, GET, OPTIONS, etc
    allow_headers=["*"],
    expose_headers=["ETag", "Location"],
)

app.include_router(auto.router)
app.include_router(auto_write.router)
app.include_router(health.router)
app.include_router(metrics.router)
app.include_router(graphql_router, prefix="/graphql")
