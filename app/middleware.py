# app/middleware.py
import time
from uuid import uuid4

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        start_time = time.time()
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "API Request Failed",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                error=str(e),
                process_time=round(time.time() - start_time, 4),
            )
            raise

        log_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time": round(time.time() - start_time, 4),
        }
        if request.query_params:
            log_data["query_params"] = dict(request.query_params)

        if response.status_code >= 400:
            logger.warning("API Request Completed with Error", **log_data)
        else:
            logger.info("API Request Completed", **log_data)

        response.headers["X-Request-ID"] = request_id
        return response
