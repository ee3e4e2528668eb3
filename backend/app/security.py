"""
Inkwell Backend — Access Token Helpers
========================================

What:  Encode and verify the HS256 bearer tokens that identify the requester.
How:   python-jose JWTs; the `sub` claim is the user id as a string, `exp` is
       enforced on decode.
Who:   `decode_access_token` is used by the auth dependency on every request.
       `create_access_token` serves local tooling and the test suite; issuing
       tokens to end users belongs to the identity service.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from app.config import settings
from app.exceptions import AuthenticationError


def create_access_token(
    user_id: int,
    expires_in: Optional[timedelta] = None,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """Return a signed access token for `user_id`."""
    now = datetime.now(timezone.utc)
    expires_at = now + (expires_in or timedelta(minutes=settings.jwt_expire_minutes))
    claims: Dict[str, Any] = {
        **(extra_claims or {}),
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify `token` and return the user id it was issued for.

    Raises:
        AuthenticationError: bad signature, expired token, or missing/non-numeric subject.
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise AuthenticationError(context={"reason": type(exc).__name__}) from exc

    subject = claims.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise AuthenticationError(context={"reason": "invalid_subject"}) from exc
