"""
Custom middleware for API request logging.
"""
import logging
import time

from utils.mongo import log_api_request

logger = logging.getLogger(__name__)


class APILoggingMiddleware:
    """
    Middleware to log API requests to MongoDB.
    Every /api/ request is logged except documentation and the log viewer itself.
    """

    LOGGED_PREFIX = '/api/'
    SKIPPED_PREFIXES = ['/api/docs', '/api/schema', '/api/analytics']
    # Never stored in the audit log
    REDACTED_KEYS = {'password', 'password_confirm', 'refresh', 'access'}

    def __init__(self, get_response):
        self.get_response = get_response

    def should_log(self, path):
        return path.startswith(self.LOGGED_PREFIX) and not any(
            path.startswith(prefix) for prefix in self.SKIPPED_PREFIXES
        )

    def __call__(self, request):
        if not self.should_log(request.path):
            return self.get_response(request)

        start_time = time.time()
        response = self.get_response(request)
        execution_time_ms = (time.time() - start_time) * 1000

        user_id = None
        if hasattr(request, 'user') and request.user.is_authenticated:
            user_id = request.user.id

        # DRF authenticates inside the view; fall back to the renderer context
        renderer_context = getattr(response, 'renderer_context', None) or {}
        drf_request = renderer_context.get('request')
        if user_id is None and drf_request is not None and drf_request.user.is_authenticated:
            user_id = drf_request.user.id

        request_params = {}
        if request.method == 'GET':
            request_params = {
                k: v[0] if isinstance(v, list) and len(v) == 1 else v
                for k, v in dict(request.GET).items()
            }
        elif drf_request is not None and isinstance(drf_request.data, dict):
            request_params = {
                k: v for k, v in drf_request.data.items() if k not in self.REDACTED_KEYS
            }

        error = None
        data = getattr(response, 'data', None)
        if isinstance(data, dict) and isinstance(data.get('error'), str):
            error = data['error']

        try:
            log_api_request(
                endpoint=request.path,
                method=request.method,
                user_id=user_id,
                request_params=request_params,
                response_status=response.status_code,
                execution_time_ms=round(execution_time_ms, 2),
                error=error
            )
        except Exception:
            # Don't let logging errors affect the response
            logger.exception("Error logging API request")

        return response
