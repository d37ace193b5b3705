from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse

from smilies.api.blobs import router as blobs_router
from smilies.api.smiley import router as smiley_router
from smilies.api.v1.router import router as v1_router
from smilies.config import settings
from smilies.dependencies.storage import create_storage
from smilies.logging_config import setup_logging

# Setup application logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One storage client for the whole process, closed on shutdown
    app.state.storage = create_storage(settings)
    logger.info(f"Using {settings.STORAGE_BACKEND} storage backend")
    try:
        yield
    finally:
        await app.state.storage.close()


app = FastAPI(title="Smilies", lifespan=lifespan)

app.include_router(smiley_router)
app.include_router(blobs_router)
app.include_router(v1_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/smiley")


@app.get("/health")
async def health():
    return {"status": "ok"}


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
    # Log detailed error with stack trace, keyed by path and method
    logger.error(
        f"Unhandled exception: {exc.__class__.__name__}: {str(exc)}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    # Return safe, static message to client (no internal details exposed)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        },
    )
