from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cyclestore.db.session import get_db
from cyclestore.schemas.auth import Identity
from cyclestore.schemas.common import MessageResponse
from cyclestore.schemas.product import ProductListResponse, ProductOut, ProductResponse, ProductWrite
from cyclestore.security.deps import get_current_identity
from cyclestore.services import products as service


router = APIRouter()


@router.get("", response_model=ProductListResponse)
def list_products(db: Session = Depends(get_db)) -> ProductListResponse:
    items = service.list_products(db)
    return ProductListResponse(count=len(items), products=[ProductOut.model_validate(p) for p in items])


@router.get("/my", response_model=ProductListResponse)
def my_products(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)) -> ProductListResponse:
    items = service.list_products_by_owner(db, identity.id)
    return ProductListResponse(count=len(items), products=[ProductOut.model_validate(p) for p in items])


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)) -> ProductResponse:
    return ProductResponse(product=ProductOut.model_validate(service.get_product(db, product_id)))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductWrite,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> ProductResponse:
    product = service.create_product(db, identity, payload)
    return ProductResponse(message="Producto creado exitosamente", product=ProductOut.model_validate(product))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    payload: ProductWrite,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> ProductResponse:
    product = service.update_product(db, identity, product_id, payload)
    return ProductResponse(message="Producto actualizado exitosamente", product=ProductOut.model_validate(product))


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> MessageResponse:
    name = service.delete_product(db, identity, product_id)
    return MessageResponse(message=f'Producto "{name}" eliminado exitosamente')
