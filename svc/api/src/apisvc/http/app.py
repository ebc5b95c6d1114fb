import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from figlog import configure_logging
from figlog import request_context

from apisvc.http.router.public import router as public_router
from apisvc.http.router.admin import router as admin_router
from apisvc.http.exception import BaseAPIException
from apisvc.config import settings

__all__ = ["app"]


configure_logging("apisvc")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):  # noqa
    logger.info("api http server initialized")
    yield
    logger.info("api http server terminated")


app = FastAPI(
    title="figflag API",
    version="0.1.0",
    description="Feature flag and config distribution",
    lifespan=lifespan,
)

# public snapshots are read cross-origin by browser sdks
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "If-None-Match"],
    expose_headers=["ETag", "Cache-Control"],
    max_age=86400,
)

app.include_router(public_router)
app.include_router(admin_router)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    with request_context(request.headers.get("X-Request-ID")) as request_id:
        logger.debug("processing request: %s %s", request.method, request.url.path)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


@app.exception_handler(BaseAPIException)
async def handle_api_exception(request: Request, exc: BaseAPIException):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"api error: {exc.detail}, status code: {exc.status_code}, path: {request.url.path}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


@app.get("/health", tags=["info"])
async def health() -> dict:
    return {"status": "healthy"}


@app.get("/info", tags=["info"])
async def info() -> dict:
    return {
        "name": "FigFlagAPI",
        "description": "FigFlag HTTP Interface.",
        "version": "0.1.0",
    }
