"""FastAPI web application."""

from fastapi import FastAPI

from .. import __version__
from .routes import analysis, entries

# Create FastAPI app
app = FastAPI(
    title="Symptom Diary",
    description="Food and symptom diary with trigger correlation analysis",
    version=__version__,
)

# Include routers
app.include_router(entries.router, prefix="/entries", tags=["entries"])
app.include_router(analysis.router, prefix="/analysis", tags=["analysis"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
