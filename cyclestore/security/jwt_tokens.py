"""Issue and verify the signed identity tokens used as bearer credentials.

Tokens are stateless: validity depends only on the signature and the ``exp``
claim, so nothing is stored server side and nothing can be revoked early.
"""

import datetime as dt
from typing import Any, Dict, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from cyclestore.core.errors import TokenExpired, TokenInvalid, Unauthenticated
from cyclestore.core.settings import Settings, settings as default_settings
from cyclestore.schemas.auth import Identity


BEARER_SCHEME = "Bearer"
MISSING_TOKEN_MESSAGE = "Token de acceso no proporcionado"
MALFORMED_TOKEN_MESSAGE = "Formato de token invalido"


def _utc_now() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


def issue_token(
    identity: Identity,
    settings: Optional[Settings] = None,
    expires_delta: Optional[dt.timedelta] = None,
) -> str:
    settings = settings or default_settings
    now = _utc_now()
    if expires_delta is None:
        expires_delta = dt.timedelta(hours=settings.token_expires_hours)
    payload: Dict[str, Any] = {
        "id": identity.id,
        "email": identity.email,
        "name": identity.name,
        "role": identity.role,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: Optional[str], settings: Optional[Settings] = None) -> Identity:
    """Return the identity embedded in ``token``.

    Raises ``Unauthenticated`` for an empty or structurally malformed token,
    ``TokenExpired`` once ``exp`` has passed and ``TokenInvalid`` when the
    signature or the claims do not check out.
    """
    settings = settings or default_settings
    if not token:
        raise Unauthenticated(MISSING_TOKEN_MESSAGE)
    if token.count(".") != 2:
        raise Unauthenticated(MALFORMED_TOKEN_MESSAGE)
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired()
    except jwt.PyJWTError:
        raise TokenInvalid()
    try:
        return Identity.model_validate(payload)
    except PydanticValidationError:
        raise TokenInvalid()


def parse_bearer(authorization: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise Unauthenticated(MISSING_TOKEN_MESSAGE)
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        raise Unauthenticated(MALFORMED_TOKEN_MESSAGE)
    if not parts[1]:
        # Well-formed header with nothing after the scheme
        raise TokenInvalid()
    return parts[1]
