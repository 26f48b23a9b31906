# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps
from typing import cast

from flask import Request, current_app, g, request

from chatapp.domain.users.repositories import TokenService
from chatapp.shared.errors.base import MissingTokenError
from chatapp.shared.logging import logger

TOKEN_SERVICE_EXTENSION = "chatapp.token_service"


class AuthedRequest(Request):
    user_id: int
    username: str


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def install_token_service(app, tokens: TokenService) -> None:
    app.extensions[TOKEN_SERVICE_EXTENSION] = tokens


def _bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth[:7].lower() == "bearer ":
        return auth[7:].strip()
    return ""


def auth_required(f):
    @wraps(f)
    def inner(*a, **kw):
        token = _bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise MissingTokenError()

        tokens = cast(TokenService, current_app.extensions[TOKEN_SERVICE_EXTENSION])
        payload = tokens.verify(token)

        req = authed_request()
        req.user_id = payload.user_id
        req.username = payload.username
        g.user_id = payload.user_id
        logger.debug(f"Auth OK: user={payload.user_id} {request.method} {request.path}")
        return f(*a, **kw)

    return inner


__all__ = [
    "AuthedRequest",
    "TOKEN_SERVICE_EXTENSION",
    "auth_required",
    "authed_request",
    "install_token_service",
]
