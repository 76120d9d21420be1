"""
Configuration constants and settings.

This module centralizes all configuration values used throughout the application.
Values can be overridden via environment variables for deployment flexibility.
"""

import os
from pathlib import Path

# Base data directory (writable). Defaults to local ./data but can be overridden
DATA_DIR = Path(os.getenv("BACKEND_DATA_DIR", "data"))
DATA_DIR.mkdir(parents=True, exist_ok=True)

# Database settings
DB_PATH = os.getenv("DB_PATH", str(DATA_DIR / "items.db"))  # SQLite database file path
SCHEMA_PATH = Path(__file__).parent / "schema.sql"  # Path to SQL schema file
RESET_DB_ON_STARTUP = os.getenv("RESET_DB_ON_STARTUP", "false").lower() in {"1", "true", "yes"}

# CORS (Cross-Origin Resource Sharing) settings
# Defaults to allowing any origin. To restrict, set FRONTEND_URL.
FRONTEND_URL = os.getenv("FRONTEND_URL")
if FRONTEND_URL:
    CORS_ORIGINS = [
        FRONTEND_URL,
        FRONTEND_URL.replace("localhost", "127.0.0.1") if "localhost" in FRONTEND_URL else None,
    ]
    CORS_ORIGINS = [origin for origin in CORS_ORIGINS if origin]
else:
    CORS_ORIGINS = ["*"]

# Batch processing settings
# Pool size defaults to the number of CPUs (see utils.resource_detector.pick_pool_size)
_pool_size = os.getenv("PROCESSING_POOL_SIZE")
PROCESSING_POOL_SIZE = int(_pool_size) if _pool_size else None
PROCESSING_TIMEOUT_SECONDS = float(os.getenv("PROCESSING_TIMEOUT_SECONDS", "30"))  # Aggregate deadline for one batch
PROCESSING_ITEM_DELAY_SECONDS = float(os.getenv("PROCESSING_ITEM_DELAY_SECONDS", "0.1"))  # Simulated cost per item
POOL_SHUTDOWN_TIMEOUT_SECONDS = float(os.getenv("POOL_SHUTDOWN_TIMEOUT_SECONDS", "10"))  # Drain limit on shutdown
