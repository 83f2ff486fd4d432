from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.responses import error_response, ok_response
from app.db import get_db
from app.repositories.newsletter_repo import NewsletterRepository
from app.schemas.newsletter_schema import NewsletterIn
from app.utils.logging import get_logger

router = APIRouter(tags=["newsletter"])
log = get_logger("app.api.newsletter", "NEWSLETTER")


@router.post("", summary="Subscribe to the newsletter")
def subscribe(payload: Optional[NewsletterIn] = None, db: Session = Depends(get_db)):
    if payload is None:
        return error_response(400, "Invalid email")
    try:
        if NewsletterRepository(db).subscribe(payload.email):
            log.info(f"subscribed {payload.email}")
    except SQLAlchemyError:
        log.exception("subscribe failed")
        return error_response(500, "Failed to subscribe")
    return ok_response()
