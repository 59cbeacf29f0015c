import logging
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from cyclestore.core.errors import NotFound, ValidationError
from cyclestore.models.product import Product
from cyclestore.schemas.auth import Identity
from cyclestore.schemas.product import ProductWrite
from cyclestore.services.policy import ensure_can_modify


logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 200
PRICE_QUANTUM = Decimal("0.01")
# NUMERIC(10, 2) leaves eight integer digits
PRICE_LIMIT = Decimal("100000000")


def _parse_price(raw: Any) -> Decimal:
    try:
        price = Decimal(str(raw).strip())
        if not price.is_finite() or price < 0 or price >= PRICE_LIMIT:
            raise InvalidOperation
        return price.quantize(PRICE_QUANTUM)
    except InvalidOperation:
        raise ValidationError("El precio debe ser un numero positivo")


def validate_product_input(payload: ProductWrite) -> Tuple[str, Decimal, Optional[str]]:
    """Return cleaned ``(name, price, image_url)`` or raise ``ValidationError``."""
    name = (payload.name or "").strip()
    raw_price = payload.price
    if not name or raw_price is None or (isinstance(raw_price, str) and not raw_price.strip()):
        raise ValidationError("Nombre y precio son requeridos")
    price = _parse_price(raw_price)
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"El nombre no puede exceder {NAME_MAX_LENGTH} caracteres")
    image_url = (payload.image_url or "").strip() or None
    return name, price, image_url


def _query(db: Session):
    return db.query(Product).options(joinedload(Product.owner))


def list_products(db: Session) -> List[Product]:
    return _query(db).order_by(Product.created_at.desc(), Product.id.desc()).all()


def list_products_by_owner(db: Session, owner_id: int) -> List[Product]:
    return (
        _query(db)
        .filter(Product.owner_id == owner_id)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def get_product(db: Session, product_id: int) -> Product:
    product: Optional[Product] = _query(db).filter(Product.id == product_id).first()
    if not product:
        raise NotFound("Producto no encontrado")
    return product


def create_product(db: Session, identity: Identity, payload: ProductWrite) -> Product:
    name, price, image_url = validate_product_input(payload)
    product = Product(name=name, price=price, image_url=image_url, owner_id=identity.id)
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("User %s created product %s", identity.id, product.id)
    return product


def update_product(db: Session, identity: Identity, product_id: int, payload: ProductWrite) -> Product:
    product = get_product(db, product_id)
    ensure_can_modify(identity, product.owner_id, "No tienes permiso para editar este producto")
    name, price, image_url = validate_product_input(payload)
    product.name = name
    product.price = price
    product.image_url = image_url
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, identity: Identity, product_id: int) -> str:
    """Delete the product and return its name for the confirmation message."""
    product = get_product(db, product_id)
    ensure_can_modify(identity, product.owner_id, "No tienes permiso para eliminar este producto")
    name, owner_id = product.name, product.owner_id
    db.delete(product)
    db.commit()
    logger.info("User %s deleted product %s (owner %s)", identity.id, product_id, owner_id)
    return name
