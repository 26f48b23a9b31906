# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from chatapp.shared.config import load_config
from chatapp.shared.logging import clear_correlation_id, logger, set_correlation_id

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-auth-token"})
_SENSITIVE_PARAMS = ("password", "token", "key", "secret")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    return {
        key: (
            f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
            if key.lower() in _SENSITIVE_HEADERS
            else value
        )
        for key, value in headers.items()
    }


def _sanitize_query_params(params: dict[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if any(s in key.lower() for s in _SENSITIVE_PARAMS) else value
        for key, value in params.items()
    }


def configure_request_logging(app: Flask) -> None:
    debug_mode = load_config().debug_logging

    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get("X-Request-ID") or secrets.token_urlsafe(8))
        g.request_start_time = time.perf_counter()

        if debug_mode:
            logger.info(
                f"http.request: start (method={request.method}, path={request.path}, "
                f"ip={_client_ip()}, query={_sanitize_query_params(request.args.to_dict())}, "
                f"headers={_sanitize_headers(dict(request.headers))}, "
                f"body_size={request.content_length or 0})"
            )

    @app.after_request
    def _after_request(response: Response) -> Response:
        started = getattr(g, "request_start_time", time.perf_counter())
        dt = (time.perf_counter() - started) * 1000
        logger.info(
            f"http.request: done (method={request.method}, path={request.path}, "
            f"status={response.status_code}, user_id={getattr(g, 'user_id', None)}, "
            f"dt_ms={dt:.0f})"
        )
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"http.request: error ({type(exc).__name__} on {request.method} {request.path})"
            )
        clear_correlation_id()


__all__ = ["configure_request_logging"]
