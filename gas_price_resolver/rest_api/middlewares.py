import time
from typing import Callable, List, Optional
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from gas_price_resolver.utils.logger import get_logger, set_correlation_id, set_session_id


class RouteLoggerMiddleware(BaseHTTPMiddleware):
    _cid_header: str = 'x-request-id'  # request correlation key header name
    _sid_header: str = 'x-session-id'  # session correlation key header name

    def __init__(self, app: FastAPI, *, skip_routes: Optional[List[str]] = None):
        self._logger = get_logger(__name__)
        self._skip_routes = skip_routes or []
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self._cid_header) or uuid4().hex
        set_correlation_id(request_id)
        if self._sid_header in request.headers:
            set_session_id(request.headers[self._sid_header])

        if any(request.url.path.startswith(path) for path in self._skip_routes):
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        response.headers[self._cid_header] = request_id

        log_args = {
            "request_method": request.method,
            "request_path": request.url.path,
            "request_duration": round(time.perf_counter() - start_time, 4),
            "response_status": response.status_code,
        }
        msg = f"Request {'successful' if response.status_code < 500 else 'failed'}"
        self._logger.info(msg, extra=log_args)
        return response
