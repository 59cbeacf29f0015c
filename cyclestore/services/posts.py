import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from cyclestore.core.errors import NotFound, ValidationError
from cyclestore.models.post import BlogPost
from cyclestore.schemas.auth import Identity
from cyclestore.schemas.post import PostWrite
from cyclestore.services.policy import ensure_can_modify


logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 300
CONTENT_MIN_LENGTH = 10


def validate_post_input(payload: PostWrite) -> Tuple[str, str]:
    title = (payload.title or "").strip()
    if not title or not payload.content:
        raise ValidationError("Titulo y contenido son requeridos")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"El titulo no puede exceder {TITLE_MAX_LENGTH} caracteres")
    content = payload.content.strip()
    if len(content) < CONTENT_MIN_LENGTH:
        raise ValidationError(f"El contenido debe tener al menos {CONTENT_MIN_LENGTH} caracteres")
    return title, content


def _query(db: Session):
    return db.query(BlogPost).options(joinedload(BlogPost.author))


def list_posts(db: Session) -> List[BlogPost]:
    return _query(db).order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()


def get_post(db: Session, post_id: int) -> BlogPost:
    post: Optional[BlogPost] = _query(db).filter(BlogPost.id == post_id).first()
    if not post:
        raise NotFound("Post no encontrado")
    return post


def create_post(db: Session, identity: Identity, payload: PostWrite) -> BlogPost:
    title, content = validate_post_input(payload)
    post = BlogPost(title=title, content=content, author_id=identity.id)
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s published post %s", identity.id, post.id)
    return post


def update_post(db: Session, identity: Identity, post_id: int, payload: PostWrite) -> BlogPost:
    post = get_post(db, post_id)
    ensure_can_modify(identity, post.author_id, "No tienes permiso para editar este post")
    post.title, post.content = validate_post_input(payload)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, identity: Identity, post_id: int) -> str:
    post = get_post(db, post_id)
    ensure_can_modify(identity, post.author_id, "No tienes permiso para eliminar este post")
    title, author_id = post.title, post.author_id
    db.delete(post)
    db.commit()
    logger.info("User %s deleted post %s (author %s)", identity.id, post_id, author_id)
    return title
