# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless session tokens.

A token is a Fernet envelope (AES-128-CBC + HMAC-SHA256) around the JSON
encoded :class:`TokenPayload`. The envelope authenticates its own issue
timestamp, and every decryption passes the configured lifetime as the TTL,
so an expired token is rejected by the envelope before the payload is even
decoded. Tokens from more than a minute in the future are rejected the same
way.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from cryptography.fernet import Fernet, InvalidToken

from chatapp.domain.users.entities import TokenPayload
from chatapp.domain.users.repositories import TokenService
from chatapp.shared.config import TokenConfig
from chatapp.shared.errors.base import InfrastructureError, InvalidTokenError, TokenExpiredError
from chatapp.shared.logging import logger

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenKeyError(InfrastructureError):
    def __init__(self, reason: str) -> None:
        super().__init__("token_key_invalid", context={"reason": reason})


class FernetTokenService(TokenService):
    def __init__(
        self,
        key: bytes | str,
        lifetime: timedelta,
        *,
        clock: Clock = utc_now,
    ) -> None:
        try:
            self._fernet = Fernet(key)
        except (TypeError, ValueError) as exc:
            raise TokenKeyError("key must be 32 url-safe base64-encoded bytes") from exc
        if lifetime.total_seconds() < 1:
            raise TokenKeyError("token lifetime must be at least one second")
        self._lifetime = lifetime
        self._ttl = int(lifetime.total_seconds())
        self._clock = clock

    @classmethod
    def from_config(cls, config: TokenConfig, *, clock: Clock = utc_now) -> FernetTokenService:
        lifetime = timedelta(hours=config.lifetime_hours)
        try:
            return cls(config.key, lifetime, clock=clock)
        except TokenKeyError:
            if not config.allow_ephemeral_key:
                logger.error(
                    "tokens.init: TOKEN_KEY is missing or invalid; generate one with "
                    "cryptography.fernet.Fernet.generate_key()"
                )
                raise
        logger.warning(
            "tokens.init: TOKEN_KEY is missing or invalid, using an ephemeral random key. "
            "Tokens will not verify after a restart or on other instances."
        )
        return cls(Fernet.generate_key(), lifetime, clock=clock)

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def _now(self) -> datetime:
        # Envelope timestamps have one-second resolution.
        return self._clock().replace(microsecond=0)

    def issue(self, user_id: int, username: str) -> str:
        now = self._now()
        payload = TokenPayload(
            user_id=user_id,
            username=username,
            issued_at=now,
            expire_at=now + self._lifetime,
        )
        token = self._fernet.encrypt_at_time(_encode_payload(payload), int(now.timestamp()))
        logger.debug(
            f"tokens.issue: ok (user_id={user_id}, exp={payload.expire_at.isoformat()})"
        )
        return token.decode("ascii")

    def verify(self, token: str) -> TokenPayload:
        if not token or not token.isascii():
            raise InvalidTokenError()

        now = self._now()
        now_ts = int(now.timestamp())
        try:
            raw = self._fernet.decrypt_at_time(token, ttl=self._ttl, current_time=now_ts)
        except InvalidToken as exc:
            if self._envelope_expired(token, now_ts):
                logger.info("tokens.verify: expired")
                raise TokenExpiredError() from exc
            logger.info("tokens.verify: rejected (bad tag or structure)")
            raise InvalidTokenError() from exc

        payload = _decode_payload(raw)
        if payload.is_expired(now):
            logger.info(f"tokens.verify: expired payload (user_id={payload.user_id})")
            raise TokenExpiredError()
        return payload

    def _envelope_expired(self, token: str, now_ts: int) -> bool:
        # extract_timestamp authenticates the envelope, so a forged or
        # truncated token never gets classified as merely expired.
        try:
            issued_ts = self._fernet.extract_timestamp(token)
        except InvalidToken:
            return False
        return issued_ts + self._ttl < now_ts


def _encode_payload(payload: TokenPayload) -> bytes:
    return json.dumps(
        {
            "user_id": payload.user_id,
            "username": payload.username,
            "issued_at": payload.issued_at.isoformat(),
            "expire_at": payload.expire_at.isoformat(),
        },
        separators=(",", ":"),
    ).encode("utf-8")


def _decode_payload(raw: bytes) -> TokenPayload:
    try:
        data = json.loads(raw)
        payload = TokenPayload(
            user_id=int(data["user_id"]),
            username=str(data["username"]),
            issued_at=datetime.fromisoformat(data["issued_at"]),
            expire_at=datetime.fromisoformat(data["expire_at"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("tokens.verify: authentic envelope with undecodable payload")
        raise InvalidTokenError() from exc
    if payload.expire_at.tzinfo is None or payload.issued_at.tzinfo is None:
        raise InvalidTokenError()
    return payload


__all__ = ["Clock", "FernetTokenService", "TokenKeyError", "utc_now"]
