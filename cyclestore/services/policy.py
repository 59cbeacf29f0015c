from cyclestore.core.errors import Forbidden
from cyclestore.schemas.auth import Identity


def can_modify(identity: Identity, owner_id: int) -> bool:
    """Owners manage their own resources; admins manage everyone's."""
    return identity.is_admin or identity.id == owner_id


def ensure_can_modify(identity: Identity, owner_id: int, message: str) -> None:
    if not can_modify(identity, owner_id):
        raise Forbidden(message)
