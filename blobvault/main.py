from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from blobvault.api.v1.router import router as v1_router
from blobvault.logging_config import setup_logging
from blobvault.storage.exceptions import StorageErrorKind, StorageException

# Title shown in the generated OpenAPI docs (/docs, /redoc)
app = FastAPI(title="blobvault")

# Every route in v1_router is served under /api/v1
app.include_router(v1_router, prefix="/api/v1")

# Setup application logging
logger = setup_logging()

# HTTP status and error title for each storage failure kind
STORAGE_ERROR_STATUS = {
    StorageErrorKind.NOT_FOUND: (404, "Not Found"),
    StorageErrorKind.INVALID_NAME: (400, "Bad Request"),
    StorageErrorKind.WRITE_FAILED: (507, "Insufficient Storage"),
    StorageErrorKind.NOT_SUPPORTED: (501, "Not Implemented"),
    StorageErrorKind.UNKNOWN: (500, "Internal Server Error"),
}


@app.exception_handler(StorageException)
async def storage_exception_handler(request: Request, exc: StorageException):
    """Translate storage failures into JSON errors by kind."""
    status_code, error = STORAGE_ERROR_STATUS.get(exc.kind, (500, "Internal Server Error"))

    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"Storage error ({exc.kind.value}) on {request.method} {request.url.path}: {exc.message}",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "message": exc.message,
            "kind": exc.kind.value,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Unwrap the 'detail' field from HTTPException responses."""
    content = exc.detail

    if isinstance(content, dict):
        return JSONResponse(
            status_code=exc.status_code,
            content=content
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": "Error",
            "message": content
        }
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    # Full stack trace goes to the log, never to the client
    logger.error(
        f"Unhandled exception: {exc.__class__.__name__}: {str(exc)}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        },
    )
