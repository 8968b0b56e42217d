"""
FastAPI application for AI thumbnail design with Gemini.

Features:
- Prompt optimization with a deterministic fallback
- Thumbnail generation and iterative editing
- Consistent batch generation
- Intelligent fusion of 2-4 images
- In-memory design sessions with generation history
"""
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import json
from typing import Any

from config import Config
from thumbnails.routes import router as thumbnails_router
from batch.routes import router as batch_router
from fusion.routes import router as fusion_router
from sessions.routes import router as sessions_router
from utils.data_uri import abbreviate_data_uris
from utils.logger import get_logger
from common.error_messages import ErrorCode, action_failure, format_error_detail

# Initialize logger
logger = get_logger("main")

# Sensitive fields that should be masked in logs
SENSITIVE_FIELDS = {
    'api_key', 'token', 'secret', 'authorization', 'password'
}


def mask_sensitive_data(data: Any, mask_value: str = "***MASKED***") -> Any:
    """
    Recursively mask sensitive fields in data structures.

    Args:
        data: Data to mask (dict, list, or string)
        mask_value: Value to replace sensitive data with

    Returns:
        Data with sensitive fields masked
    """
    if isinstance(data, dict):
        return {
            key: mask_value if key.lower() in SENSITIVE_FIELDS else mask_sensitive_data(value, mask_value)
            for key, value in data.items()
        }
    elif isinstance(data, list):
        return [mask_sensitive_data(item, mask_value) for item in data]
    elif isinstance(data, str):
        # Try to parse as JSON and mask if successful
        try:
            parsed = json.loads(data)
            if isinstance(parsed, (dict, list)):
                return json.dumps(mask_sensitive_data(parsed, mask_value))
        except (json.JSONDecodeError, ValueError):
            pass
        return data
    else:
        return data


def loggable_body(body: str) -> str:
    """Masked, image-abbreviated and truncated body text for request logs."""
    text = abbreviate_data_uris(mask_sensitive_data(body))
    if len(text) > Config.LOG_BODY_LIMIT:
        text = text[:Config.LOG_BODY_LIMIT] + "... [truncated]"
    return text


# Validate configuration on startup
try:
    Config.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    logger.error("Please set required environment variables in .env file")

# Create FastAPI app
app = FastAPI(
    title="Thumbcraft API",
    description="Design thumbnails with Gemini: prompt optimization, generation, iterative editing, batch series and multi-image fusion.",
    version="1.0.0"
)


# CORS middleware - MUST be added FIRST so it runs on all responses (including error responses and OPTIONS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors in the uniform failure shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed request bodies before any model call."""
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', []) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning(f"Validation failed for {request.url.path}: {problems}")
    return JSONResponse(
        status_code=400,
        content=action_failure(ErrorCode.INVALID_PARAMETER, problems)
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions globally."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": format_error_detail(ErrorCode.UNKNOWN_ERROR)}
    )


# Request logging middleware - runs AFTER CORS middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests with timing and request/response details."""
    start_time = time.time()
    full_url = str(request.url)

    try:
        # Capture request body
        request_body = None
        body_bytes = b""
        if request.method in ["POST", "PUT", "PATCH"]:
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = loggable_body(body_bytes.decode('utf-8'))
            except Exception as e:
                request_body = f"[Error reading body: {str(e)}]"

        log_msg = f"→ {request.method} {full_url} - Client: {request.client.host if request.client else 'unknown'}"
        if request_body:
            log_msg += f"\n  Request Body: {request_body}"
        logger.info(log_msg)

        # The body read above is cached on the request and replayed downstream
        response = await call_next(request)

        # Capture response body
        response_body = None
        try:
            response_body_bytes = b""
            async for chunk in response.body_iterator:
                response_body_bytes += chunk

            if response_body_bytes:
                response_body = loggable_body(response_body_bytes.decode('utf-8'))

            response = Response(
                content=response_body_bytes,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type
            )
        except Exception as e:
            response_body = f"[Error reading response: {str(e)}]"

        process_time = (time.time() - start_time) * 1000
        log_msg = f"← {request.method} {full_url} - Status: {response.status_code} - Time: {process_time:.2f}ms"
        if response_body:
            log_msg += f"\n  Response Body: {response_body}"
        logger.info(log_msg)

        return response
    except Exception as e:
        process_time = (time.time() - start_time) * 1000
        logger.error(f"← {request.method} {full_url} - Error: {str(e)} - Time: {process_time:.2f}ms")
        # Re-raise to be handled by global exception handler
        raise

logger.info("CORS middleware configured")

# Include routers
app.include_router(thumbnails_router)
logger.info("Thumbnails router included")

app.include_router(batch_router)
logger.info("Batch router included")

app.include_router(fusion_router)
logger.info("Fusion router included")

app.include_router(sessions_router)
logger.info("Sessions router included")


@app.on_event("startup")
async def startup_event():
    """Log startup event."""
    logger.info("=" * 80)
    logger.info("Thumbcraft API starting up")
    logger.info(f"Text model: {Config.GEMINI_TEXT_MODEL} | Image model: {Config.GEMINI_IMAGE_MODEL}")
    logger.info(f"Request timeout: {Config.REQUEST_TIMEOUT_SECONDS}s")
    logger.info(f"Host: {Config.HOST}:{Config.PORT}")
    logger.info("=" * 80)


@app.on_event("shutdown")
async def shutdown_event():
    """Log shutdown event."""
    logger.info("=" * 80)
    logger.info("Thumbcraft API shutting down")
    logger.info("=" * 80)


@app.get("/healthz")
def health():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return {"status": "ok"}


# Run server directly
if __name__ == "__main__":
    logger.info(f"Starting server on {Config.HOST}:{Config.PORT}")
    uvicorn.run(
        "app:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=True,
        log_level="info"
    )
