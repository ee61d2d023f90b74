import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .clock import seed_publisher, start_ticker, stop_ticker
from .config import ENABLE_TICKER, LOG_LEVEL
from .database import Base, engine
from .routes import timeslots, view

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    seed_publisher()
    if ENABLE_TICKER:
        start_ticker()
    yield
    if ENABLE_TICKER:
        stop_ticker()


# Create FastAPI app
app = FastAPI(
    title="Day Timer API",
    description="Single-day visual timer with named, non-overlapping timeslots",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(timeslots.router, prefix="/timeslots", tags=["timeslots"])
app.include_router(view.router, tags=["view"])


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Day Timer API",
        "version": __version__,
        "endpoints": {
            "timeslots": "GET /timeslots/ - Today's timeslots",
            "insert": "POST /timeslots/ - Insert a range in seconds since midnight",
            "create": "POST /timeslots/create - Create a slot from a name and HH:MM pickers",
            "reset": "POST /timeslots/reset - Start today over with no slots",
            "active": "GET /timeslots/active - Slot running right now",
            "clock": "GET /clock - Remaining time and day progress",
            "view": "GET /view - Derived view state for the day bar",
            "latest": "GET /view/latest - View state from the last clock tick",
        },
        "swagger_ui": "/docs - Interactive API documentation",
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}


# This allows running the app directly with: python -m daytimer.main
if __name__ == "__main__":
    import uvicorn
    logger.info("Starting Day Timer API on http://localhost:8000")
    uvicorn.run("daytimer.main:app", host="0.0.0.0", port=8000, reload=True)
