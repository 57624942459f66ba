# ========================================
# app/main.py
# ========================================

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.errors import PyMongoError

from app.config import ConfigurationError, get_settings
from app.database import connect_to_mongo, close_mongo_connection, get_db
from app.logging_config import get_logger

# ===========================
# IMPORT ALL ROUTERS
# ===========================

# Session tokens
from app.routes.auth import router as auth_router

# Jobs
from app.routes.job import router as job_router

# Applications
from app.routes.application import router as application_router

logger = get_logger(__name__)
settings = get_settings()

# ===========================
# DATABASE LIFESPAN
# ===========================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate config and connect to MongoDB on startup; close on shutdown."""
    if settings.is_production and not settings.token_secret:
        raise ConfigurationError("ACCESS_TOKEN_SECRET must be set when ENVIRONMENT=production")
    await connect_to_mongo()
    yield
    await close_mongo_connection()

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="Job Portal API",
    description="Jobs, job applications and cookie-based session tokens",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ===========================
# CORS MIDDLEWARE
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# ERROR HANDLERS
# ===========================

@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    """A failed store call fails only the request that made it."""
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Database operation failed"})

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(auth_router, tags=["Auth"])
app.include_router(job_router, tags=["Jobs"])
app.include_router(application_router, tags=["Applications"])

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check"""
    return "Hello from job portal server!"


@app.get("/health")
async def health_check(db=Depends(get_db)):
    """Health check endpoint; pings the database."""
    await db.command("ping")
    return {
        "status": "healthy",
        "database": "connected"
    }


def run():
    import uvicorn

    logger.info("Job portal app listening on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
