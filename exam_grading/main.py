"""
FastAPI application for the Scanned Exam Grader
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from exam_grading.routes import grading, config as config_routes
from exam_grading.config import settings
from exam_grading.core import BaseAPIException, logger as app_logger
from exam_grading.services import get_grading_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events"""
    # Startup
    app_logger.info("Starting Scanned Exam Grader API...")
    app_logger.info(f"Environment: {'development' if settings.DEBUG else 'production'}")

    # Fail on invalid grading configuration before serving requests
    get_grading_service()

    yield

    # Shutdown
    app_logger.info("Shutting down Scanned Exam Grader API...")


app = FastAPI(
    title="Scanned Exam Grader API",
    description="Segmentation and grading of recognized exam answers",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(BaseAPIException)
async def api_exception_handler(request: Request, exc: BaseAPIException):
    """Handle custom API exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "error_code": exc.error_code
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An unexpected error occurred",
            "error_code": "INTERNAL_ERROR"
        }
    )


# Include routers
app.include_router(grading.router, prefix="/api/grading", tags=["Grading"])
app.include_router(config_routes.router, prefix="/api/config", tags=["Configuration"])


@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "name": "Scanned Exam Grader API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "version": "1.0.0"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "exam_grading.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
