import logging
import time
import uuid

logger = logging.getLogger("orderfellow.request")


class RequestIDMiddleware:
    """
    Adds/propagates a request id for tracing and reports response time.
    Sets X-Request-ID and X-Response-Time-ms, and logs one line per request.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        rid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        request.request_id = rid
        t0 = time.perf_counter()
        response = self.get_response(request)
        dt = int((time.perf_counter() - t0) * 1000)
        response["X-Request-ID"] = rid
        response["X-Response-Time-ms"] = str(dt)
        logger.info("%s %s -> %s in %dms rid=%s", request.method, request.path, response.status_code, dt, rid)
        return response
