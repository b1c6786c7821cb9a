"""
BITS Research Connect - Main Application

FastAPI backend with:
- PostgreSQL for users, profiles, positions and applications
- In-memory demo dataset when the database is unreachable
- JWT authentication for students and professors

Run: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.exceptions import ResearchConnectError
from app.core.logging import setup_logging
from app.db.bootstrap import init_database, table_counts
from app.db.postgres import is_in_memory, test_postgres_connection

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and prepare the database on startup."""
    setup_logging()
    mode = init_database()
    app.state.data_source = mode
    logger.info("BITS Research Connect started (data source: %s)", mode)
    yield


# Create FastAPI app
app = FastAPI(
    title="BITS Research Connect",
    description="""
    Research-opportunity marketplace for BITS Pilani, Goa campus.

    ## Features
    - **Authentication**: campus email accounts for students and professors
    - **Students**: profile, eligibility-aware browsing, applications
    - **Professors**: post positions, review and shortlist applicants
    - **Positions**: search by keyword and filter by department
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ResearchConnectError)
async def research_connect_error_handler(request: Request, exc: ResearchConnectError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("%s %s database error: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database error, please try again"})


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "BITS Research Connect", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    connected = test_postgres_connection()
    return {
        "status": "healthy" if connected else "degraded",
        "database": "connected" if connected else "disconnected",
        "mock_mode": is_in_memory(),
        "tables": table_counts() if connected else {}
    }
