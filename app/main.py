from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.core.config import settings
from app.core.security_config import configure_security_middleware, get_cors_config
from app.api.endpoints import auth as auth_endpoints
from app.api.endpoints import hello as hello_endpoints
from app.api import health as health_router
from app.infrastructure.auth.user_store import user_store

logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    logger.info("Application startup sequence initiated...")
    logger.info(f"User store ready with accounts: {user_store.usernames()}")
    try:
        yield
    finally:
        logger.info("Application shutdown sequence initiated...")

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    version="0.1.0",
    lifespan=lifespan,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

configure_security_middleware(app)

# CORS outermost so preflight requests are answered before other middleware
app.add_middleware(CORSMiddleware, **get_cors_config())

api_router_prefix = settings.API_PREFIX
app.include_router(
    auth_endpoints.router,
    prefix=f"{api_router_prefix}/auth",
    tags=["Authentication"]
)
app.include_router(
    hello_endpoints.router,
    prefix=api_router_prefix,
    tags=["Protected"]
)

app.include_router(health_router.router, tags=["Health Checks"])

@app.get("/", tags=["Root"])
async def read_root():
    return {"message": f"Welcome to {settings.APP_NAME} - Version {app.version}"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
