import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import BaseAPIException, InternalServerError, error_body

logger = logging.getLogger("tokenapi")

# 라우팅 단계에서 발생하는 starlette 예외용 코드
HTTP_ERROR_CODES = {
    404: "NOT_FOUND_001",
    405: "METHOD_NOT_ALLOWED",
}


def _describe(request: Request) -> str:
    client = request.client.host if request.client else "-"
    return f"{request.method} {request.url.path} from {client}"


def _log_http_error(label: str, request: Request, status_code: int, detail) -> None:
    message = f"[{label}] {_describe(request)} -> {status_code}: {detail}"
    if status_code >= 500:
        logger.error(message)
    else:
        logger.warning(message)


async def handle_base_api_exception(request: Request, exc: BaseAPIException):
    _log_http_error("APIError", request, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.detail,
        headers=getattr(exc, "headers", None),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    _log_http_error("HTTPException", request, exc.status_code, exc.detail)

    if isinstance(exc.detail, dict) and "error" in exc.detail:
        content = exc.detail
    else:
        code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        content = error_body(code, str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # ValueError 등 ctx 객체가 섞여 있어 그대로는 직렬화되지 않음
    errors = jsonable_encoder(exc.errors())
    _log_http_error("ValidationError", request, 422, errors)
    return JSONResponse(
        status_code=422,
        content=error_body(
            "VALIDATION_001", "Invalid data provided", {"errors": errors}
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(
        f"[Unhandled Error] {_describe(request)}\n"
        f"{type(exc).__name__}: {exc}\n{tb_str}"
    )

    internal = InternalServerError()
    return JSONResponse(status_code=internal.status_code, content=internal.detail)


def register_exception_handlers(app: FastAPI) -> None:
    """BaseAPIException 이 HTTPException 하위 클래스라 먼저 등록"""
    app.add_exception_handler(BaseAPIException, handle_base_api_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
