from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cyclestore.core.settings import Settings
from cyclestore.db.session import get_db
from cyclestore.schemas.auth import Identity, LoginRequest, LoginResponse, MeResponse, MeUser
from cyclestore.security.deps import get_current_identity, get_settings
from cyclestore.services.auth import authenticate
from cyclestore.services.users import get_user


router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    token, identity = authenticate(db, payload, settings)
    return LoginResponse(message="Login exitoso", token=token, user=identity)


@router.get("/me", response_model=MeResponse)
def me(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)) -> MeResponse:
    # The token already proved who the caller is; re-read the row for current data
    user = get_user(db, identity.id)
    return MeResponse(user=MeUser.model_validate(user))
