from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zokey.core.config import settings
from zokey.core.exceptions import ZokeyError
from zokey.core.logging_config import setup_logging
from zokey.core.mongo import close_mongo, connect_mongo, ensure_indexes
from zokey.routers.categories import router as categories_router
from zokey.routers.search import router as search_router
from zokey.routers.users import router as users_router

# Setup logging (must be done before any other imports that use logging)
setup_logging(log_level=settings.LOG_LEVEL, debug=settings.DEBUG)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_mongo()
    await ensure_indexes()
    yield
    # Shutdown
    await close_mongo()


app = FastAPI(
    title=settings.APP_NAME,
    description="Questionnaire-driven product recommendations",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(ZokeyError)
async def zokey_error_handler(request: Request, exc: ZokeyError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": {"code": exc.code, "message": exc.message}},
    )


app.include_router(categories_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(search_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.APP_NAME}"}


@app.get("/api/v1/health")
async def health_check():
    return {"status": "healthy", "mock_mode": settings.MOCK_MODE}
