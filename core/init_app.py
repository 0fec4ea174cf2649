from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime, timezone
import logging
import platform
import time

from core.config import settings
from routers import convert_router, ingest_router
from schemas.upload_schema import EnvironmentInfo, HealthResponse

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def create_application() -> FastAPI:
    """
    Creates and configures the FastAPI application instance.
    """
    configure_logging()
    app = FastAPI(title=settings.PROJECT_NAME)

    # 1. CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 2. Request / response logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"API Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"API Response: {response.status_code}")
        return response

    # 3. Error envelope: every failure is reported as {"error": "..."}
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request"})

    # 4. Include Routers
    app.include_router(ingest_router.router)
    app.include_router(convert_router.router)

    # 5. Health Check Endpoint
    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        """Reports service status and whether the Gemini API key is configured."""
        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            return HealthResponse(
                status="ok",
                timestamp=timestamp,
                gemini_configured=settings.gemini_configured,
                environment=EnvironmentInfo(
                    python=platform.python_version(),
                    env=settings.ENVIRONMENT,
                    platform=platform.system().lower(),
                    uptime=time.monotonic() - STARTED_AT,
                ),
            )
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"status": "error", "timestamp": timestamp, "error": str(e)},
            )

    return app
