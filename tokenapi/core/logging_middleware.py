import logging
import time
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

# tokenapi 로거의 stdout/stderr 핸들러로 출력
logger = logging.getLogger("tokenapi")


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        method = request.method
        path = request.url.path
        client = request.client.host if request.client else "-"

        logger.info(f"[Request] {method} {path} from {client}")
        # 처리되지 않은 예외는 exception_handlers 에서 한 번만 기록
        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        message = f"[Response] {method} {path} from {client} -> {response.status_code} in {duration_ms:.1f}ms"
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)
        return response
