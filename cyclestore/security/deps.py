from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from cyclestore.core.errors import Forbidden, Unauthenticated
from cyclestore.core.settings import Settings
from cyclestore.schemas.auth import Identity
from cyclestore.security.jwt_tokens import parse_bearer, verify_token


# Read the raw header so a missing value and a wrong scheme can be told apart
_authorization_header = APIKeyHeader(name="Authorization", auto_error=False, scheme_name="Bearer")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_identity(
    authorization: Optional[str] = Depends(_authorization_header),
    settings: Settings = Depends(get_settings),
) -> Identity:
    token = parse_bearer(authorization)
    return verify_token(token, settings)


def require_admin(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    if identity is None:
        raise Unauthenticated("Usuario no autenticado")
    if not identity.is_admin:
        raise Forbidden("Acceso denegado. Se requieren permisos de administrador")
    return identity
