from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import formatting, health, networks
from .config import settings
from .logging_config import setup_logging

setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Routerscope API",
    description="Human-readable rendering of decoded router commands",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(networks.router, tags=["Networks"])
app.include_router(formatting.router, tags=["Formatting"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "Routerscope API",
        "version": __version__,
        "description": "Human-readable rendering of decoded router commands",
        "docs": "/docs",
        "health": "/healthz"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "routerscope.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
