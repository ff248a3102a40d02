"""
FastAPI application entry point.

Serves the BMI calculator page at ``/`` and the JSON calculation API at
``/api/calculate``.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from routers import bmi, pages
from core.config import settings
from core.logging import setup_logging
from core.exceptions import BmiValidationError, INVALID_REQUEST_BODY
import logging
import time
import uvicorn

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="BMI Calculator API",
    description="Body Mass Index calculation with WHO category classification",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)


@app.on_event("startup")
async def announce_startup():
    logger.info(
        "Starting BMI Calculator application",
        extra={
            "extra_fields": {
                "event": "app.startup.initiated",
                "environment": settings.ENVIRONMENT,
            }
        }
    )


# CORS middleware - permissive unless CORS_ORIGINS lists specific origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing information."""
    start_time = time.time()
    
    logger.info(
        f"Request: {request.method} {request.url.path}",
        extra={
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            }
        }
    )
    
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        
        logger.info(
            f"Response: {request.method} {request.url.path} - {response.status_code}",
            extra={
                "extra_fields": {
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time * 1000, 2),
                }
            }
        )
        
        # Add timing header
        response.headers["X-Process-Time"] = str(process_time)
        return response
    except Exception as e:
        logger.error(
            f"Request failed: {request.method} {request.url.path}",
            exc_info=True,
            extra={
                "extra_fields": {
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(e),
                }
            }
        )
        raise


@app.exception_handler(BmiValidationError)
async def bmi_validation_exception_handler(request: Request, exc: BmiValidationError):
    """Rejected measurements go back as plain text."""
    logger.info(
        f"Rejected: {request.method} {request.url.path} - {exc.error_code}",
        extra={
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
                "status_code": exc.status_code,
                "error_code": exc.error_code,
            }
        }
    )
    return PlainTextResponse(exc.detail, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON or wrong field types - rejected before the calculator runs."""
    logger.warning(
        f"Invalid request body: {request.method} {request.url.path}",
        extra={
            "extra_fields": {
                "event": "http.request.invalid",
                "method": request.method,
                "path": request.url.path,
                "errors": [
                    {"loc": list(error.get("loc", ())), "type": error.get("type")}
                    for error in exc.errors()
                ],
            }
        }
    )
    return PlainTextResponse(INVALID_REQUEST_BODY, status_code=status.HTTP_400_BAD_REQUEST)


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={
            "extra_fields": {
                "method": request.method,
                "path": request.url.path,
            }
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/health")
async def health():
    """
    Health check for load balancers and uptime monitors.
    
    The service has no dependencies, so this is always healthy.
    """
    return {
        "status": "healthy",
        "timestamp": time.time(),
    }


@app.get("/ping")
async def ping():
    """Minimal ping endpoint for uptime monitors."""
    return {"pong": True}


# Include routers
app.include_router(pages.router)
app.include_router(bmi.router)


def run():
    """Run the API under uvicorn on the configured host and port."""
    address = f"{settings.HOST}:{settings.PORT}"
    logger.info(
        f"Server listening on {address}",
        extra={
            "extra_fields": {
                "event": "app.server.listening",
                "address": address,
            }
        }
    )
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    run()
