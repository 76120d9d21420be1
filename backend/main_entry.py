"""
Production entry point (``item-service`` console script).
Starts uvicorn programmatically instead of via CLI.
"""
import os
import uvicorn


def main():
    host = os.environ.get('HOST', '127.0.0.1')
    port = int(os.environ.get('BACKEND_PORT', '8000'))

    from main import app

    # Single worker process: the batch worker pool is per-process state
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.environ.get('UVICORN_LOG_LEVEL', 'info'),
    )


if __name__ == "__main__":
    main()
