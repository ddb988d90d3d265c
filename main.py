import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import db
from errors import ServiceCenterError
from logging_config import setup_logging
from routes import admin, auth, customer, inventory, mechanic
from services.users import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_file or None)
    if settings.secret_key_generated:
        logger.warning("SECRET_KEY is not set; using a random key, tokens will not survive a restart")
    if settings.admin_username and settings.admin_password:
        UserService(db).ensure_admin(settings.admin_username, settings.admin_password, settings.admin_full_name)
    logger.info("Vehicle Service Center API started, document at %s", db.path)
    yield


app = FastAPI(title="Vehicle Service Center API", lifespan=lifespan)

app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(mechanic.router)
app.include_router(customer.router)
app.include_router(inventory.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceCenterError)
async def service_error_handler(request: Request, exc: ServiceCenterError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/api")
def home():
    return {"message": "Welcome to the Vehicle Service Center API!"}


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = errors[0]["loc"][-1] if errors and errors[0].get("loc") else "request"
    if not isinstance(field, str):
        field = "request"
    logger.warning("%s %s rejected: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=400, content={"message": f"Invalid value for {field}."})
