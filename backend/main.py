"""
Change Review Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import changes, config
from services.config_manager import ConfigManager
from services.file_change_store import FileChangeStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logger.info("[Backend] Starting Change Review Backend...")
    config_manager = ConfigManager.get_instance()
    logger.info("[Backend] ConfigManager initialized (%s)", config_manager.config_file)

    FileChangeStore.get_instance()
    logger.info("[Backend] FileChangeStore initialized")

    yield
    logger.info("[Backend] Shutting down Change Review Backend...")


app = FastAPI(
    title="Change Review Backend",
    description="Per-task file change review and diff service for the coding assistant",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for the desktop client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # desktop client runs locally
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(changes.router, prefix="/api/changes", tags=["changes"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "change-review-backend"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))
