import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from albums import router as albums_router
from core import config, db, logs
from core.errors import EditConflictError, RecordNotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


@asynccontextmanager
async def lifespan(_: FastAPI):
    logs.configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.env_list("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: object, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@app.middleware("http")
async def recover_unhandled_errors(request: Request, call_next):
    # Last line of defence: anything not mapped below becomes a 500.
    try:
        return await call_next(request)
    except Exception:
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        response = _error(500, "the server encountered a problem and could not process your request")
        response.headers["Connection"] = "close"
        return response


@app.exception_handler(RecordNotFoundError)
async def record_not_found(_: Request, __: RecordNotFoundError) -> JSONResponse:
    return _error(404, "the requested resource could not be found")


@app.exception_handler(EditConflictError)
async def edit_conflict(_: Request, __: EditConflictError) -> JSONResponse:
    return _error(409, "unable to update the record due to an edit conflict, please try again")


@app.exception_handler(ValidationFailedError)
async def validation_failed(_: Request, exc: ValidationFailedError) -> JSONResponse:
    return _error(422, exc.errors)


@app.exception_handler(RequestValidationError)
async def bad_request(_: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()])


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return _error(404, "the requested resource could not be found")
    if exc.status_code == 405:
        return _error(
            405,
            f"the {request.method} method is not supported for this resource",
            headers=getattr(exc, "headers", None),
        )
    return _error(exc.status_code, exc.detail)


app.include_router(albums_router.router, tags=["albums"])


@app.get("/v1/healthcheck")
def healthcheck() -> dict:
    return {
        "status": "available",
        "system_info": {
            "environment": config.app_env(),
            "version": config.app_version(),
        },
    }
