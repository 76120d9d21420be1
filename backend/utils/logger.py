"""
Centralized logging configuration.

Every module logs through the shared ``item_service`` logger so batch runs,
soft failures and request errors end up in one file.
"""
import logging
import os
import sys
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(LOG_DIR / "item_service.log"),
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger("item_service")

# Third-party loggers are noisy at INFO
logging.getLogger("uvicorn").setLevel(logging.WARNING)
logging.getLogger("fastapi").setLevel(logging.WARNING)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)
