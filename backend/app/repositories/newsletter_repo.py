from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.newsletter import NewsletterSubscriber


class NewsletterRepository:
    def __init__(self, db: Session):
        self.db = db

    def subscribe(self, email: str) -> bool:
        """
        Add `email` to the subscriber list unless it is already there.
        Returns True when a new row was written. Commits on its own.
        """
        exists = (
            self.db.query(NewsletterSubscriber.id)
            .filter(NewsletterSubscriber.email == email)
            .first()
        )
        if exists:
            return False
        self.db.add(NewsletterSubscriber(email=email))
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent request inserted the same address first
            self.db.rollback()
            return False
        return True
