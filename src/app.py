from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
import os

# Add the current directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import exceptions
from routes import base_routes, options_routes
from core.payments.controller.paymentcontroller import payment_routes
from core.callbacks.controller.callbackcontroller import callback_routes
from core.diagnostics.controller.diagnosticscontroller import diagnostics_routes
from core.auditlogging.service.logservice import APILoggingMiddleware

from config import settings
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from loguru import logger
import logging
from contextlib import asynccontextmanager


logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())


# Initialize FastAPI with lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown"""
    # Startup
    logger.info(f"[APP_STARTUP] {settings.SERVICE_NAME} starting...")
    missing = settings.missing_gateway_settings()
    if missing:
        logger.warning(f"[APP_STARTUP_CONFIG] Payment requests will be rejected until these are set: {', '.join(missing)}")
    if not settings.PAYHERO_CALLBACK_URL:
        logger.warning("[APP_STARTUP_CONFIG] PAYHERO_CALLBACK_URL is not set, PayHero will use the account default")
    yield
    # Shutdown
    logger.info("[APP_SHUTDOWN] Application shutting down...")


app = FastAPI(
    title=settings.SERVICE_NAME,
    version="1.0",
    description="""**PayHero Relay** Payment initiation and webhook relay for the PayHero M-Pesa gateway.

    Endpoints:
    - Payment (STK push initiation)
    - Callback (PayHero status webhook)
    - Test (connectivity diagnostics)
    """,
    license_info={
        "name": "MIT",
    },
    lifespan=lifespan
)

# -----------------------------------------------------------
# Middleware (CORS, access log)
# -----------------------------------------------------------
app.add_middleware(APILoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# Exception Handlers

app.add_exception_handler(RequestValidationError, exceptions.validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, exceptions.method_not_allowed_handler)

# Routes Registration

app.include_router(base_routes, prefix="/api/v1", tags=["Base Routes"])
app.include_router(payment_routes, prefix="/api/v1/payment", tags=["Payment Routes"])
app.include_router(callback_routes, prefix="/api/v1/callback", tags=["Callback Routes"])
app.include_router(diagnostics_routes, prefix="/api/v1/test", tags=["Diagnostics Routes"])
app.include_router(options_routes)
