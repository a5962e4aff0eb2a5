"""
Diff Viewer Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import compare, config
from services.config_manager import ConfigManager

logger = logging.getLogger("diff_viewer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logger.info("[Backend] Starting Diff Viewer Backend...")
    config_manager = ConfigManager.get_instance()
    logger.info("[Backend] ConfigManager initialized (%s)", config_manager.config_file)

    yield
    logger.info("[Backend] Shutting down Diff Viewer Backend...")


app = FastAPI(
    title="Diff Viewer Backend",
    description="Line and word level comparison of two text documents",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for the browser front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(compare.router, prefix="/api/compare", tags=["compare"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "diff-viewer-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))
