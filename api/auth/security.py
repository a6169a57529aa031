"""
Auth security helpers.

Access tokens are HS256 JWTs whose `sub` claim is the acting user's id.

Mint one for an actor (run from `api/`, with the same JWT_SECRET as the API):
  python -m auth.security 1
"""

from __future__ import annotations

import argparse
import os
import time
from typing import Any

import jwt

DEV_JWT_SECRET = "dev-change-this-secret-before-deploying"


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return os.environ.get("JWT_SECRET", "").strip() or DEV_JWT_SECRET


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(*, actor_id: int) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    payload = {
        "sub": str(actor_id),
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload


def actor_id_from_token(token: str) -> int:
    payload = decode_access_token(token)
    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise AuthSecurityError("Invalid access token subject.")
    return int(subject)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print an access token for an actor id.")
    parser.add_argument("actor_id", type=int, help="Teacher or student id to put in the `sub` claim")
    args = parser.parse_args(argv)
    if args.actor_id < 1:
        parser.error("actor_id must be a positive integer.")
    print(build_access_token(actor_id=args.actor_id))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
