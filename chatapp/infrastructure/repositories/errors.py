# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from chatapp.shared.errors.base import StorageError
from chatapp.shared.logging import logger

P = ParamSpec("P")
R = TypeVar("R")


def storage_operation(name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Report SQLAlchemy failures of the wrapped call as ``StorageError``."""

    def decorator(f: Callable[P, R]) -> Callable[P, R]:
        @wraps(f)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return f(*args, **kwargs)
            except SQLAlchemyError as exc:
                logger.error(f"storage.{name}: failed ({type(exc).__name__})")
                raise StorageError(name) from exc

        return wrapper

    return decorator
