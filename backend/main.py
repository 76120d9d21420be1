"""
Main FastAPI application entry point.

This module sets up the FastAPI application with:
- Database initialization and worker pool lifecycle (lifespan)
- CORS middleware for frontend communication
- Exception handlers for error responses
- API routers (items, system)

Items are stored in SQLite. The batch endpoint moves every item to PROCESSED
using a worker pool that lives as long as the application.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from db import init_db
from config import CORS_ORIGINS, PROCESSING_POOL_SIZE, POOL_SHUTDOWN_TIMEOUT_SECONDS
from api.routers import items, system
from api.error_handlers import (
    validation_exception_handler,
    processing_exception_handler,
    general_exception_handler
)
from fastapi.exceptions import RequestValidationError
from utils.logger import logger
from utils.processing import ProcessingError, WorkerPool
from utils.resource_detector import pick_pool_size


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager - handles startup and shutdown tasks.

    On startup:
    - Initializes the SQLite database from schema.sql
    - Creates the shared worker pool used by batch processing

    On shutdown:
    - Shuts the worker pool down, draining tasks that are still running
    """
    logger.info("Starting item service backend...")

    await init_db()
    logger.info("Database initialized")

    pool_size = pick_pool_size(PROCESSING_POOL_SIZE)
    app.state.worker_pool = WorkerPool(pool_size)
    logger.info(f"Worker pool started with {pool_size} workers")
    yield
    logger.info("Shutting down item service backend...")
    await app.state.worker_pool.shutdown(timeout=POOL_SHUTDOWN_TIMEOUT_SECONDS)
    logger.info("Worker pool stopped")


app = FastAPI(
    title="Item Service API",
    description="CRUD and batch processing API for items",
    version="1.0.0",
    lifespan=lifespan
)

# Allow a frontend on a different origin to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers for consistent error responses
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # Invalid request data -> 400
app.add_exception_handler(ProcessingError, processing_exception_handler)  # Batch failures -> 500
app.add_exception_handler(Exception, general_exception_handler)  # All other unexpected errors

app.include_router(system.router)  # Health check, DB version
app.include_router(items.router)  # Item CRUD and batch processing

logger.info("FastAPI application initialized")
