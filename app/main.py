import uuid
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any

import structlog
import uvicorn
from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import ServiceError
from app.core.logging import configure_logging, describe_body, request_id_ctx
from app.core.sentry import init_sentry
from app.menu import MenuItem, MenuService, MenuStore, MenuValidationError, seed_items

configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)

LOGGED_BODY_METHODS = {"POST", "PUT"}


def build_service() -> MenuService:
    store = MenuStore(seed_items() if settings.seed_menu else None)
    return MenuService(store)


service = build_service()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_sentry()
    logger.info("service_started", items=len(service.store))
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


def _write_rate_limit() -> str:
    return settings.write_rate_limit


def _request_target(request: Request) -> str:
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return target


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"status": status_code, "error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    request_id_token = request_id_ctx.set(request_id)

    if request.method in LOGGED_BODY_METHODS:
        body = await request.body()
        logger.info(
            "request_received",
            method=request.method,
            target=_request_target(request),
            body=describe_body(body),
        )
    else:
        logger.info(
            "request_received",
            method=request.method,
            target=_request_target(request),
        )

    # Not reset when call_next raises: the 500 handler runs outside this
    # middleware and still logs under this request id.
    response = await call_next(request)
    request_id_ctx.reset(request_id_token)

    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(MenuValidationError)
async def menu_validation_handler(request: Request, exc: MenuValidationError):
    logger.warning(
        "menu_validation_failed",
        path=request.url.path,
        fields=[detail.field for detail in exc.details],
    )
    return _error_response(
        exc.status_code,
        exc.error,
        exc.message,
        details=[detail.model_dump() for detail in exc.details],
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    logger.warning("service_error", path=request.url.path, error=exc.error, status_code=exc.status_code)
    return _error_response(exc.status_code, exc.error, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("request_validation_failed", path=request.url.path, error=str(exc))
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]) or "body",
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return _error_response(400, "BadRequest", "Malformed request", details=details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return _error_response(
            404,
            "NotFound",
            f"Route {request.method} {_request_target(request)} does not exist",
        )
    return _error_response(
        exc.status_code,
        HTTPStatus(exc.status_code).phrase.replace(" ", ""),
        str(exc.detail),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limit_exceeded", path=request.url.path)
    return _error_response(429, "TooManyRequests", "Rate limit exceeded. Please slow down.")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_exception", path=request.url.path)
    response = _error_response(500, "InternalServerError", "Something went wrong")
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["x-request-id"] = request_id
    return response


@app.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "Tasty Bites API is running!"


@app.get("/health")
async def health() -> dict[str, str]:
    logger.info("health_check")
    return {"status": "ok"}


@app.get("/api/menu", response_model=list[MenuItem])
async def list_menu_items() -> list[MenuItem]:
    return service.list_items()


@app.get("/api/menu/{item_id}", response_model=MenuItem)
async def get_menu_item(item_id: int) -> MenuItem:
    return service.get_item(item_id)


@app.post("/api/menu", response_model=MenuItem, status_code=201)
@limiter.limit(_write_rate_limit)
async def create_menu_item(request: Request, payload: Any = Body(default=None)) -> MenuItem:
    return service.create_item(payload)


@app.put("/api/menu/{item_id}", response_model=MenuItem)
@limiter.limit(_write_rate_limit)
async def update_menu_item(
    request: Request,
    item_id: int,
    payload: Any = Body(default=None),
) -> MenuItem:
    return service.update_item(item_id, payload)


@app.delete("/api/menu/{item_id}")
@limiter.limit(_write_rate_limit)
async def delete_menu_item(request: Request, item_id: int) -> dict[str, str]:
    service.delete_item(item_id)
    return {"message": "Menu item deleted"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
