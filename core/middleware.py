"""Core middleware configurations"""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import CurableError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": message},
        status_code=status_code,
        headers=CORS_HEADERS
    )


async def curable_error_handler(request: Request, exc: CurableError) -> JSONResponse:
    return error_response(exc.message, exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error(f"Invalid parameters for {request.method} {request.url.path}: {exc.errors()}")
    return error_response("Invalid request parameters", 500)


def setup_error_handlers(app: FastAPI):
    """401 for authentication failures, 500 for every other pipeline error"""
    app.add_exception_handler(CurableError, curable_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


def setup_cors(app: FastAPI):
    """Answer every preflight with an empty 200 and stamp CORS headers on all responses.

    Runs ahead of routing, so OPTIONS never reaches authentication. Anything
    that escapes the route handlers is logged and returned as a 500.
    Starlette's CORSMiddleware only answers requests that carry an Origin
    header; clients here expect the headers and the empty 200 regardless.
    """

    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error in {request.method} {request.url.path}")
            return error_response("Internal server error", 500)

        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
