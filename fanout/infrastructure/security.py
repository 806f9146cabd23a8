"""Verification of bearer credentials presented to the API."""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from jose import JWTError, jwt

from fanout.config import Settings

PRINCIPAL_SERVICE = "service"
PRINCIPAL_USER = "user"


@dataclass(frozen=True)
class Principal:
    """Caller identity derived from a verified bearer credential."""

    kind: str
    subject: str | None = None

    @property
    def is_service(self) -> bool:
        return self.kind == PRINCIPAL_SERVICE


def is_service_credential(token: str, settings: Settings) -> bool:
    return hmac.compare_digest(token.encode(), settings.service_role_key.encode())


def decode_user_token(token: str, settings: Settings) -> dict:
    """Decode a user JWT signed with the configured secret."""

    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=["HS256"],
            options={"verify_aud": False},
        )
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def verify_bearer_credential(token: str, settings: Settings) -> Principal:
    """Return the :class:`Principal` for ``token`` or raise ``ValueError``."""

    if not token:
        raise ValueError("Missing bearer credential")
    if is_service_credential(token, settings):
        return Principal(kind=PRINCIPAL_SERVICE)

    claims = decode_user_token(token, settings)
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise ValueError("Could not validate credentials")
    return Principal(kind=PRINCIPAL_USER, subject=subject)


def create_user_token(subject: str, settings: Settings, **claims: object) -> str:
    """Sign a user JWT; used by tooling and tests that impersonate a user."""

    return jwt.encode({**claims, "sub": subject}, settings.secret_key, algorithm="HS256")


__all__ = [
    "PRINCIPAL_SERVICE",
    "PRINCIPAL_USER",
    "Principal",
    "create_user_token",
    "decode_user_token",
    "is_service_credential",
    "verify_bearer_credential",
]
