"""
Error handlers for the API.

These handlers catch exceptions and return consistent JSON error responses.
FastAPI automatically routes exceptions to the appropriate handler based on exception type.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from utils.logger import logger
from utils.processing import ProcessingError
from utils.validation import format_validation_errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle validation errors (invalid request data).

    Returns 400 Bad Request with one message per invalid field, e.g.
    ``{"email": "Email must be properly formatted"}``.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=format_validation_errors(exc.errors())
    )


async def processing_exception_handler(request: Request, exc: ProcessingError) -> JSONResponse:
    """
    Handle batch processing failures (timeout, interruption, pool failure).

    The client only gets a generic message; the cause is logged.
    """
    logger.error(f"Batch processing failed: {exc} (path: {request.url.path})", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": f"Error processing items: {exc}"}
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions (catch-all for any unhandled errors).

    Logs the full error with stack trace for debugging and returns a simple
    error message to the client.
    """
    logger.error(f"Unexpected error: {exc} (path: {request.url.path})", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(exc), "status": "error"}
    )
