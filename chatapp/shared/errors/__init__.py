# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AppError,
    AuthError,
    AuthorizationError,
    DomainError,
    ForbiddenError,
    InfrastructureError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
    StorageError,
    TokenExpiredError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "AuthError",
    "AuthorizationError",
    "DomainError",
    "ForbiddenError",
    "InfrastructureError",
    "InvalidTokenError",
    "MissingTokenError",
    "NotFoundError",
    "StorageError",
    "TokenExpiredError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
