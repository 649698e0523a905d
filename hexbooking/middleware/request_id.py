import uuid

from starlette.middleware.base import BaseHTTPMiddleware

from hexbooking.core.logging import bind_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-Id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id that is echoed back and attached to its log records."""

    async def dispatch(self, request, call_next):
        req_id = request.headers.get(REQUEST_ID_HEADER, "").strip() or str(uuid.uuid4())
        request.state.request_id = req_id
        token = bind_request_id(req_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers[REQUEST_ID_HEADER] = req_id
        return response
