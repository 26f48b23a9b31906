# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(code=resolved_code, status=resolved_status, context=context)


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )


class AuthError(AppError):
    def __init__(self, code: str = "unauthorized") -> None:
        super().__init__(code=code, status=HTTPStatus.UNAUTHORIZED)


class MissingTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("unauthorized")


class InvalidTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("invalid_token")


class TokenExpiredError(AuthError):
    def __init__(self) -> None:
        super().__init__("token_expired")


class ForbiddenError(AppError):
    """The resource exists but the caller may not act on it."""

    def __init__(self, action: str | None = None) -> None:
        super().__init__(
            code="forbidden",
            status=HTTPStatus.FORBIDDEN,
            context={"action": action} if action else None,
        )


AuthorizationError = ForbiddenError


class NotFoundError(AppError):
    def __init__(self, resource: str, resource_id: int) -> None:
        super().__init__(
            code=f"{resource}_not_found",
            status=HTTPStatus.NOT_FOUND,
            context={f"{resource}_id": resource_id},
        )


class StorageError(InfrastructureError):
    def __init__(self, operation: str) -> None:
        super().__init__("storage_error", context={"operation": operation})
