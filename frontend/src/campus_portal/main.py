"""
Campus Facility Booking Portal - Main FastAPI Application
"""

import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .config import settings
from .dependencies.auth import PageRedirect, get_session
from .routes import (
    admin,
    admin_bookings,
    admin_facilities,
    admin_users,
    approvals,
    auth,
    booking,
    dashboard,
    notification,
    profile,
)
from .services.api_client import ApiError, create_http_client
from .utils.session import clear_session_cookie
from .utils.templates import render

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Web portal for booking campus facilities through the booking REST API",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - " f"Status: {response.status_code} - " f"Time: {process_time:.3f}s"
    )

    return response


@app.exception_handler(PageRedirect)
async def page_redirect_handler(request: Request, exc: PageRedirect):
    response = RedirectResponse(exc.location, status_code=303)
    if exc.clear_session:
        clear_session_cookie(response)
    return response


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """An API error no page handled; an expired token ends the session"""
    if exc.is_unauthorized:
        logger.info(f"API token rejected on {request.url.path}, ending session")
        response = RedirectResponse("/", status_code=303)
        clear_session_cookie(response)
        return response

    logger.error(f"Unhandled API error on {request.url.path}: {exc!r}")
    return render(request, "error.html", {"message": exc.message}, session=get_session(request), status_code=502)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {str(exc)}", exc_info=True)
    return render(
        request,
        "error.html",
        {"message": "Something went wrong. Please try again."},
        session=get_session(request),
        status_code=500,
    )


# Startup event
@app.on_event("startup")
async def startup_event():
    """Open the shared connection pool to the booking API"""
    logger.info("Starting Campus Facility Booking portal...")
    app.state.http_client = create_http_client()
    logger.info(f"Portal started in {settings.ENVIRONMENT} mode against {settings.API_BASE_URL}")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Campus Facility Booking portal...")
    await app.state.http_client.aclose()


# Include routers
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(booking.router)
app.include_router(notification.router)
app.include_router(profile.router)
app.include_router(admin.router)
app.include_router(approvals.router)
app.include_router(admin_bookings.router)
app.include_router(admin_facilities.router)
app.include_router(admin_users.router)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {"status": "healthy", "timestamp": time.time(), "api_base_url": settings.API_BASE_URL}


if __name__ == "__main__":
    uvicorn.run(
        "campus_portal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning",
    )
