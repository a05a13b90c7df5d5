import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from db.session import engine
from routers import auth, companies, jobs, users
from utils.auth import TokenService
from utils.database import init_pool, close_pool
from utils.errors import AppError, AuthorizationError, ErrorKind

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_pool()

    yield
    await close_pool()
    await engine.dispose()


app = FastAPI(title="Jobly", lifespan=lifespan)

# 서명 키는 시작 시 한 번만 주입
app.state.token_service = TokenService(
    secret_key=settings.secret_key,
    algorithm=settings.algorithm,
    expire_minutes=settings.access_token_expire_minutes,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if not isinstance(exc, AuthorizationError):
        logger.info("%s %s - %s: %s", request.method, request.url.path, exc.kind.value, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind.value},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": errors, "kind": ErrorKind.BAD_REQUEST.value},
    )


@app.exception_handler(Exception)
async def exception_handler(request: Request, exc: Exception):
    logger.error(
        "%s %s - %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"}
    )


app.include_router(auth.router)
app.include_router(companies.router)
app.include_router(jobs.router)
app.include_router(users.router)
