from .request_logger import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
