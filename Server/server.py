"""
Arsip Server - Main FastAPI Application

This module contains the main FastAPI application for the Arsip server.
It serves the REST API used by the correspondence archive front end:
letters, dispositions, users, dashboard statistics and reports.
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from config import settings
from errors import ArsipError
from managers.database_manager import DatabaseManager
from file_storage import InitializeStorage

# Configure logging to write to both console and file
logs_dir = Path(settings.log_dir)
logs_dir.mkdir(parents=True, exist_ok=True)

# Create log filename with timestamp
log_filename = logs_dir / f"arsip-server-{datetime.now().strftime('%Y-%m-%d')}.log"

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        # Console handler
        logging.StreamHandler(),
        # File handler with rotation (max 10MB per file, keep 10 backup files)
        RotatingFileHandler(
            log_filename,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=10,
            encoding='utf-8'
        )
    ]
)
logger = logging.getLogger(__name__)

# Import database module for shared db_manager instance
import database


# ==================== Lifespan Events ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler for startup and shutdown
    Manages database initialization and attachment storage
    """
    logger.info("Arsip Server starting up...")

    database.db_manager = DatabaseManager(settings.database_path)

    # Creates tables if needed; accounts are only seeded into an empty users table
    admin_password = database.db_manager.InitializeDatabase(
        admin_password=settings.admin_password,
        seed_demo_users=settings.seed_demo_users
    )
    if admin_password and not settings.admin_password:
        logger.warning("=" * 60)
        logger.warning("NEW ADMIN USER CREATED")
        logger.warning("Username: admin")
        logger.warning(f"Password: {admin_password}")
        logger.warning("SAVE THIS PASSWORD - IT WILL NOT BE SHOWN AGAIN!")
        logger.warning("=" * 60)

    logger.info("Database initialized successfully")

    InitializeStorage()
    logger.info("Attachment storage initialized successfully")

    logger.info("Server startup complete")

    yield

    logger.info("Arsip Server shutting down...")
    database.db_manager.engine.dispose()
    logger.info("Shutdown complete")


# ==================== FastAPI Application ====================

app = FastAPI(
    title="Arsip Server",
    description="Letter archive with disposition routing",
    version="1.0.0",
    lifespan=lifespan
)

# ==================== CORS Middleware ====================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    """Log each API call as METHOD path"""
    if request.url.path.startswith("/api"):
        logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


# ==================== Error Handlers ====================

@app.exception_handler(ArsipError)
async def arsip_error_handler(request: Request, exc: ArsipError):
    """Translate service exceptions to their HTTP status codes"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed ids and missing fields are reported as 400"""
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', []))}: {error.get('msg')}"
        for error in errors
    )
    return JSONResponse(status_code=400, content={"detail": message or "Invalid input"})


# ==================== Import Routers ====================

from routes import status, auth, letters, dispositions, users, reports


# ==================== Include Routers ====================

app.include_router(status.router)
app.include_router(auth.router)
app.include_router(letters.router)
app.include_router(dispositions.router)
app.include_router(users.router)
app.include_router(reports.router)


# ==================== Main Entry Point ====================

if __name__ == "__main__":
    """
    Run the server using uvicorn
    """
    logger.info("Starting Arsip Server...")

    uvicorn.run(
        "server:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info"
    )
