from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.responses import error_response
from app.db import get_db
from app.services.catalogue_service import CatalogueService
from app.utils.logging import get_logger

router = APIRouter(tags=["catalogue"])
log = get_logger("app.api.catalogue", "CATALOGUE")


@router.get("", summary="List products with their variants")
def list_products(db: Session = Depends(get_db)):
    try:
        products = CatalogueService(db).list_products()
    except SQLAlchemyError:
        log.exception("failed to load products")
        return error_response(500, "Failed to load products")
    return [p.model_dump() for p in products]
