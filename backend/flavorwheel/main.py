"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flavorwheel.config import settings
from flavorwheel.services.ai.base import build_model_factory

app = FastAPI(
    title="Flavor Wheel API",
    description="Descriptor extraction, category taxonomies and cached flavor wheels",
    version="0.1.0",
)

logger = logging.getLogger(__name__)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],  # Frontend URL
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Shared by all requests; bounded LRU of chat model instances
app.state.model_factory = build_model_factory(settings)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Flavor Wheel API", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.on_event("startup")
def report_ai_configuration() -> None:
    """Log whether AI extraction can run."""
    if not settings.ai_extraction_enabled:
        logger.info("AI extraction disabled; using keyword extraction only.")
    elif not settings.ai_credentials_configured():
        logger.warning(
            "No API key configured for provider '%s'; using keyword extraction only.",
            settings.llm_provider,
        )


# Import and include routers
from flavorwheel.routers import descriptors, stats, taxonomies, wheels

app.include_router(descriptors.router, prefix="/api", tags=["descriptors"])
app.include_router(taxonomies.router, prefix="/api", tags=["taxonomies"])
app.include_router(wheels.router, prefix="/api", tags=["wheels"])
app.include_router(stats.router, prefix="/api", tags=["stats"])
