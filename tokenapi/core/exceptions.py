from fastapi import HTTPException, status
from typing import Optional, Dict, Any


def error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> dict:
    """모든 에러 응답의 공통 형태"""
    return {
        "success": False,
        "error": {"code": code, "message": message, "details": details or {}},
    }


class BaseAPIException(HTTPException):
    """
    API 에러의 기반 클래스

    하위 클래스는 http_status / default_code / default_message 만 정의한다.
    detail 에는 응답 본문이 그대로 들어가므로 핸들러는 그대로 내려주면 된다.
    """

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "INTERNAL_001"
    default_message: str = "Server error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.error_code = error_code or self.default_code
        self.message = message or self.default_message
        self.details = details or {}

        super().__init__(
            status_code=status_code or self.http_status,
            detail=error_body(self.error_code, self.message, self.details),
        )

    def __str__(self) -> str:
        return self.message


class AuthenticationError(BaseAPIException):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_code = "AUTH_001"
    default_message = "Authentication required"


class AuthorizationError(BaseAPIException):
    http_status = status.HTTP_403_FORBIDDEN
    default_code = "AUTH_002"
    default_message = "Admin access required"


class BusinessLogicError(BaseAPIException):
    """규칙 위반 (400) - 호출자가 항상 에러 코드를 지정"""

    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, error_code: str, message: str, details: Optional[Dict] = None):
        super().__init__(message=message, details=details, error_code=error_code)


class NotFoundError(BaseAPIException):
    http_status = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND_001"
    default_message = "Resource not found"


class ConflictError(BaseAPIException):
    http_status = status.HTTP_409_CONFLICT
    default_code = "CONFLICT_001"
    default_message = "Resource conflict"


class InternalServerError(BaseAPIException):
    pass
