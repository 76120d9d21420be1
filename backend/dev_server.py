"""Run the API locally with auto-reload on backend source changes."""
import os
from pathlib import Path

import uvicorn


def main() -> None:
    uvicorn.run(
        "main:app",
        host=os.getenv("UVICORN_HOST", "127.0.0.1"),
        port=int(os.getenv("UVICORN_PORT", "8000")),
        reload=True,
        reload_dirs=[str(Path(__file__).parent.resolve())],
        reload_includes=["*.py", "*.sql"],
        log_level=os.getenv("UVICORN_LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()
