"""Admin-side user management and account provisioning.

There is no public registration: accounts are created with ``create_user``
(see ``cyclestore.scripts.create_user``) and afterwards only their role can be
changed, or the whole account removed together with everything it owns.
"""

import logging
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from cyclestore.core.errors import NotFound, SelfDeletionForbidden, ValidationError
from cyclestore.models.user import ROLES, User
from cyclestore.schemas.auth import Identity
from cyclestore.security.passwords import hash_password


logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6
INVALID_ROLE_MESSAGE = 'Rol invalido. Debe ser "admin" o "user"'
INVALID_EMAIL_MESSAGE = "Formato de email invalido"


def normalize_email(raw: str) -> str:
    """Lowercased address, or ``ValidationError`` when it is not one.

    Provisioning and login both go through here so that every stored account
    can sign in. email-validator refuses reserved names such as ``.local``
    even without the global deliverability rules.
    """
    email = raw.strip()
    try:
        validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        raise ValidationError(INVALID_EMAIL_MESSAGE)
    return email.lower()


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(db: Session, user_id: int) -> User:
    user: Optional[User] = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("Usuario no encontrado")
    return user


def create_user(db: Session, email: str, password: str, name: str, role: str = "user") -> User:
    name = name.strip()
    if not email.strip() or not name:
        raise ValidationError("Email y nombre son requeridos")
    email = normalize_email(email)
    if role not in ROLES:
        raise ValidationError(INVALID_ROLE_MESSAGE)
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"El password debe tener al menos {PASSWORD_MIN_LENGTH} caracteres")
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("El email ya esta registrado")
    user = User(email=email, password_hash=hash_password(password), name=name, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Provisioned user %s (%s) with role %s", user.id, email, role)
    return user


def update_user_role(db: Session, acting: Identity, user_id: int, role: Optional[str]) -> User:
    if role not in ROLES:
        raise ValidationError(INVALID_ROLE_MESSAGE)
    user = get_user(db, user_id)
    if user.id == acting.id and role != acting.role:
        # Allowed: an admin may demote themselves. Only deletion of oneself is blocked.
        logger.warning("Admin %s changed their own role to %s", acting.id, role)
    user.role = role
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Admin %s set role of user %s to %s", acting.id, user.id, role)
    return user


def delete_user(db: Session, acting: Identity, user_id: int) -> str:
    """Delete a user and, through the ORM cascade, their products and posts.

    Returns the deleted user's name for the confirmation message.
    """
    if user_id == acting.id:
        raise SelfDeletionForbidden()
    user = get_user(db, user_id)
    name = user.name
    db.delete(user)
    db.commit()
    logger.info("Admin %s deleted user %s and their content", acting.id, user_id)
    return name
