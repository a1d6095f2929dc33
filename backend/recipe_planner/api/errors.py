"""JSON error bodies: {"error": ...} plus "details" for validation failures."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_planner.logging import get_logger

logger = get_logger(__name__)


def _format_validation_error(err: dict) -> str:
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
    msg = err.get("msg", "invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [_format_validation_error(err) for err in exc.errors()]
    logger.info("request.invalid path=%s details=%s", request.url.path, details)
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched path or method reads as a missing route
    if (exc.status_code == 404 and exc.detail == "Not Found") or exc.status_code == 405:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.failed path=%s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
