from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.responses import error_response, money, ok_response
from app.db import get_db
from app.schemas.checkout_schema import CheckoutIn
from app.services.checkout_service import CheckoutException, CheckoutService
from app.utils.logging import get_logger

router = APIRouter(tags=["checkout"])
log = get_logger("app.api.checkout", "CHECKOUT")


@router.post("", summary="Create order (checkout)")
def checkout(payload: Optional[CheckoutIn] = None, db: Session = Depends(get_db)):
    if payload is None:
        return error_response(400, "Cart is empty")
    svc = CheckoutService(db)
    try:
        result = svc.checkout(payload)
    except CheckoutException as e:
        log.warning(f"checkout failed: {e}")
        return error_response(500, str(e))
    except Exception:
        log.exception("checkout crashed")
        return error_response(500, "Checkout failed")
    return ok_response(
        orderId=result.order_id,
        subtotal=money(result.subtotal),
        discount=money(result.discount),
        total=money(result.total),
    )
