import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.core.exceptions import AuthenticationError, PharmacyError
from app.core.logging import setup_logging
from app.database import create_schema
from app.routers import (
    dashboard_router,
    health_router,
    medicines_router,
    prescriptions_router,
    sales_router,
    suppliers_router,
    users_router,
)

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger(__name__)

create_schema()

app = FastAPI(title=settings.APP_NAME)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin"],
)


@app.exception_handler(PharmacyError)
async def pharmacy_error_handler(request: Request, exc: PharmacyError):
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal error occurred. Please try again later."},
    )


app.include_router(health_router)
for router in (
    users_router,
    medicines_router,
    suppliers_router,
    prescriptions_router,
    sales_router,
    dashboard_router,
):
    app.include_router(router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {"message": "{} is running".format(settings.APP_NAME)}


__all__ = ["app", "root"]
