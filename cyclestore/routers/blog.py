from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cyclestore.db.session import get_db
from cyclestore.schemas.auth import Identity
from cyclestore.schemas.common import MessageResponse
from cyclestore.schemas.post import PostListResponse, PostOut, PostResponse, PostWrite
from cyclestore.security.deps import get_current_identity
from cyclestore.services import posts as service


router = APIRouter()


@router.get("", response_model=PostListResponse)
def list_posts(db: Session = Depends(get_db)) -> PostListResponse:
    items = service.list_posts(db)
    return PostListResponse(count=len(items), posts=[PostOut.model_validate(p) for p in items])


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, db: Session = Depends(get_db)) -> PostResponse:
    return PostResponse(post=PostOut.model_validate(service.get_post(db, post_id)))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostWrite,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> PostResponse:
    post = service.create_post(db, identity, payload)
    return PostResponse(message="Post creado exitosamente", post=PostOut.model_validate(post))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    payload: PostWrite,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> PostResponse:
    post = service.update_post(db, identity, post_id, payload)
    return PostResponse(message="Post actualizado exitosamente", post=PostOut.model_validate(post))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> MessageResponse:
    title = service.delete_post(db, identity, post_id)
    return MessageResponse(message=f'Post "{title}" eliminado exitosamente')
