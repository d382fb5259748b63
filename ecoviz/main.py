"""
EcoViz Backend — Main Application
Carbon footprint calculation API with AI recommendations and email summaries.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ecoviz.core.config import settings
from ecoviz.core.database import engine, Base
from ecoviz.api.routes import calculations, email

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"AI analysis: {'ON' if settings.AI_ANALYSIS_ENABLED else 'OFF'}")
    logger.info(f"Email delivery: {'ON' if settings.SMTP_HOST else 'OFF'}")

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()
    logger.info(f"Shutting down {settings.APP_NAME}")


app = FastAPI(
    title=settings.APP_NAME,
    description=(
        "Estimates annual household carbon footprints from housing, transportation, "
        "food and consumption data, with optional AI recommendations and email summaries."
    ),
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Validation Errors ────────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Raw inputs may hold NaN or Infinity, which JSON responses reject
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    missing = any(err.get("type") == "missing" for err in errors)
    logger.info(f"Rejected {request.method} {request.url.path}: {len(errors)} validation error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Missing required fields" if missing else "Invalid request data",
            "errors": jsonable_encoder(errors),
        },
    )


# ── Routes ───────────────────────────────────────────────────────────────────
app.include_router(calculations.router, tags=["Calculations"])
app.include_router(email.router, tags=["Email"])


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "ai_analysis": settings.AI_ANALYSIS_ENABLED,
    }


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the EcoViz API"}


def run():
    """Serve the API with uvicorn."""
    logger.info(f"Carbon Footprint Calculation Service listening at http://{settings.HOST}:{settings.PORT}")
    uvicorn.run("ecoviz.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
