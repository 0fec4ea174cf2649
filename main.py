import uvicorn
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from core.init_app import create_application
from core.config import settings

logger = logging.getLogger(__name__)

# 1. Define Lifespan (Startup/Shutdown logic)
@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    if not settings.gemini_configured:
        logger.warning("GEMINI_API_KEY is not set; /api/convert-to-latex will fail until it is.")
    logger.info(f"{settings.PROJECT_NAME} started (model: {settings.GEMINI_MODEL})")

    yield # Application runs here

    # --- SHUTDOWN ---
    logger.info(f"{settings.PROJECT_NAME} stopped")

# 2. Initialize App
app = create_application()
app.router.lifespan_context = lifespan

if __name__ == "__main__":
    logger.info(f"Starting {settings.PROJECT_NAME}...")
    uvicorn.run(app, host="0.0.0.0", port=8000)
