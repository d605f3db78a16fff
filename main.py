import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import AppError, InternalError, ValidationError
from app.core.logging_config import setup_logging
from app.database.create_database import create_all_tables
from app.routers import auth
from app.utils.ifsc_api_service import ifsc_api

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Register a bank account, log in with it and read your masked account details.",
    version=settings.VERSION,
)


@app.on_event("startup")
def on_startup():
    if settings.AUTO_CREATE_TABLES:
        create_all_tables()
    logger.info("Application started")


@app.on_event("shutdown")
async def on_shutdown():
    await ifsc_api.aclose()


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__} ({exc.reason})")
    elif exc.reason:
        logger.warning(f"{request.method} {request.url.path} rejected: {type(exc).__name__} ({exc.reason})")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid request"))
    return await app_error_handler(request, ValidationError(", ".join(messages) or None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return await app_error_handler(request, InternalError(reason=repr(exc)))


app.include_router(auth.router, tags=["tiny-bank-server"])


# Root endpoint
@app.get("/")
def read_root():
    return {"message": "Welcome to Tiny Bank Server API. See /docs for the endpoint documentation."}


@app.get("/health")
def health():
    return {"status": "ok"}
