"""Caller identification for owner-only routes.

Sign-up, login and session issuance live in the auth gateway. The gateway
forwards the authenticated user id in ``X-User-Id`` and proves itself with the
shared ``X-Internal-Token``.
"""

from __future__ import annotations

import secrets

from fastapi import Request

INTERNAL_TOKEN_HEADER = "X-Internal-Token"
USER_ID_HEADER = "X-User-Id"
# users.id is a PostgreSQL BIGINT.
MAX_USER_ID = 2**63 - 1


def is_valid_internal_token(*, expected_token: str, received_token: str | None) -> bool:
    if not expected_token or not received_token:
        return False
    return secrets.compare_digest(expected_token, received_token)


def is_gateway_request_authenticated(
    request: Request,
    *,
    expected_token: str,
) -> bool:
    return is_valid_internal_token(
        expected_token=expected_token,
        received_token=request.headers.get(INTERNAL_TOKEN_HEADER),
    )


def parse_user_id(value: str | None) -> int | None:
    if value is None:
        return None
    candidate = value.strip()
    if not (candidate.isascii() and candidate.isdigit()):
        return None
    user_id = int(candidate)
    if user_id <= 0 or user_id > MAX_USER_ID:
        return None
    return user_id


def extract_owner_user_id(request: Request, *, expected_token: str) -> int | None:
    if not is_gateway_request_authenticated(request, expected_token=expected_token):
        return None
    return parse_user_id(request.headers.get(USER_ID_HEADER))
