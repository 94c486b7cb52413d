"""Request logging middleware."""

import logging
from time import perf_counter

from fastapi import FastAPI, Request

logger = logging.getLogger("src.api.access")


def request_logging_middleware(api_prefix: str):
    async def log_request(request: Request, call_next):
        """One line per API request; bodies are never logged."""
        started_at = perf_counter()
        response = await call_next(request)
        path = request.url.path
        if path.startswith(api_prefix):
            elapsed_ms = round((perf_counter() - started_at) * 1000)
            logger.info(f"{request.method} {path} {response.status_code} in {elapsed_ms}ms")
        return response

    return log_request


def register_middlewares(app: FastAPI, ApplicationConfig) -> None:
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(request_logging_middleware(ApplicationConfig.API_PREFIX))
