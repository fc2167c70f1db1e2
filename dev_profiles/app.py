from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from dev_profiles.config import settings
from dev_profiles.database import init_db
from dev_profiles.exceptions import ProfileServiceError, RequestValidationFailed
from dev_profiles.utils.logging_config import setup_logging
from dev_profiles.utils.validation import field_error

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables
    init_db()
    yield


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationFailed)
    async def validation_failed_handler(request: Request, exc: RequestValidationFailed):
        logger.info(f"Validation failed on {request.method} {request.url.path}: {exc.msg}")
        return JSONResponse(status_code=exc.status_code, content={"errors": jsonable_encoder(exc.errors)})

    @app.exception_handler(ProfileServiceError)
    async def service_error_handler(request: Request, exc: ProfileServiceError):
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.msg}")
        return JSONResponse(status_code=exc.status_code, content={"msg": exc.msg})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ())]
            location = loc[0] if loc else "body"
            param = ".".join(loc[1:]) or location
            errors.append(field_error(param, err.get("msg", "Invalid value"), err.get("input"), location))
        logger.info(f"Malformed request on {request.method} {request.url.path}: {errors}")
        return JSONResponse(status_code=400, content={"errors": jsonable_encoder(errors)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return PlainTextResponse("Server Error", status_code=500)


def create_app() -> FastAPI:
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Register routes
    from dev_profiles.routes.api_profile import router as profile_router

    app.include_router(profile_router, prefix="/api/profile", tags=["profile"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
