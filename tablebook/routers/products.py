"""Product catalog API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tablebook.database import get_db
from tablebook.dependencies import CurrentUser, get_current_user
from tablebook.schemas.catalog import ProductCreate, ProductResponse
from tablebook.services.catalog import get_catalog_service

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=list[ProductResponse])
def list_products(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ProductResponse]:
    """List every product."""
    service = get_catalog_service()
    return [ProductResponse.model_validate(p) for p in service.list_products(db)]


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(
    body: ProductCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ProductResponse:
    """Add a product to the catalog."""
    service = get_catalog_service()
    product = service.create_product(db, **body.model_dump())
    return ProductResponse.model_validate(product)
