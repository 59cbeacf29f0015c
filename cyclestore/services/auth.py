import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from cyclestore.core.errors import Unauthenticated, ValidationError
from cyclestore.core.settings import Settings
from cyclestore.models.user import User
from cyclestore.schemas.auth import Identity, LoginRequest
from cyclestore.security.jwt_tokens import issue_token
from cyclestore.security.passwords import burn_password_check, verify_password
from cyclestore.services.users import normalize_email


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Credenciales invalidas"


def identity_for(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, name=user.name, role=user.role)


def authenticate(db: Session, payload: LoginRequest, settings: Settings) -> Tuple[str, Identity]:
    """Check the credentials and return a fresh token with the identity it carries."""
    if not payload.email or not payload.password:
        raise ValidationError("Email y password son requeridos")
    email = normalize_email(payload.email)
    user: Optional[User] = db.query(User).filter(User.email == email).first()
    if not user:
        burn_password_check(payload.password)
        logger.warning("Login failed for unknown email %s", email)
        raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(payload.password, user.password_hash):
        logger.warning("Login failed for user %s: wrong password", user.id)
        raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)

    identity = identity_for(user)
    logger.info("User %s logged in", user.id)
    return issue_token(identity, settings), identity
