"""错误响应映射

EventBoardError 子类 -> HTTP 状态码 + {"error": {"code", "message"}} 响应体。
"""

import structlog
from eventboard.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateError,
    EventBoardError,
    IntegrityError,
    NotFoundError,
    UnknownError,
    UploadError,
    ValidationError,
)
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

STATUS_BY_ERROR: dict[type[EventBoardError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    DuplicateError: 409,
    UploadError: 502,
    IntegrityError: 500,
    UnknownError: 500,
}


def status_for(error: EventBoardError) -> int:
    """按异常类型（含父类）查找 HTTP 状态码，未知类型返回 500"""
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def error_response(error: EventBoardError) -> JSONResponse:
    """构造统一错误响应"""
    status_code = status_for(error)
    headers = None
    if isinstance(error, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": error.code,
                "message": error.message,
            }
        },
        headers=headers,
    )


async def _handle_eventboard_error(
    request: Request, exc: EventBoardError
) -> JSONResponse:
    response = error_response(exc)
    if response.status_code >= 500:
        log.error("request_failed", code=exc.code, status_code=response.status_code)
    else:
        log.info("request_rejected", code=exc.code, status_code=response.status_code)
    return response


def register_error_handlers(app: FastAPI) -> None:
    """注册领域异常处理器"""
    app.add_exception_handler(EventBoardError, _handle_eventboard_error)
