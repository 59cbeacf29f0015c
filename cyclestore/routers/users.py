from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cyclestore.db.session import get_db
from cyclestore.schemas.auth import Identity
from cyclestore.schemas.common import MessageResponse
from cyclestore.schemas.user import UpdateUserRoleRequest, UserListResponse, UserOut, UserResponse
from cyclestore.security.deps import require_admin
from cyclestore.services import users as service


router = APIRouter()


@router.get("", response_model=UserListResponse)
def list_users(_: Identity = Depends(require_admin), db: Session = Depends(get_db)) -> UserListResponse:
    items = service.list_users(db)
    return UserListResponse(count=len(items), users=[UserOut.model_validate(u) for u in items])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, _: Identity = Depends(require_admin), db: Session = Depends(get_db)) -> UserResponse:
    return UserResponse(user=UserOut.model_validate(service.get_user(db, user_id)))


@router.put("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: int,
    payload: UpdateUserRoleRequest,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
) -> UserResponse:
    user = service.update_user_role(db, admin, user_id, payload.role)
    return UserResponse(message=f'Rol de "{user.name}" actualizado a "{user.role}"', user=UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)) -> MessageResponse:
    name = service.delete_user(db, admin, user_id)
    return MessageResponse(message=f'Usuario "{name}" eliminado exitosamente')
