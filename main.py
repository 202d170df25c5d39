"""
Wedding Invitation & Guest Console - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from guest_console.core.config import settings
from guest_console.core.db import engine, Base
from guest_console.core.errors import DomainError
from guest_console.api import deps, routes_admin, routes_guest, routes_public, routes_store, ws
from guest_console.utils.responses import domain_error_handler

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    if settings.SERVE_GUEST_STORE and not settings.USE_FIREBASE:
        Base.metadata.create_all(bind=engine)
        logger.info("Guest store tables created")
    yield
    if deps.get_store_client.cache_info().currsize:
        deps.get_store_client().close()
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Wedding Invitation & Guest Console",
    description="Invitation RSVP, guest list management and reception check-in",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(DomainError, domain_error_handler)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_guest.router, prefix="/guest", tags=["guest"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])
app.include_router(ws.router, prefix="/ws", tags=["websocket"])
if settings.SERVE_GUEST_STORE:
    app.include_router(routes_store.router, tags=["store"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
