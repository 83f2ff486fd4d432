from typing import Optional

from sqlalchemy.orm import Session

from app.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_guest(self, email: str, phone: str = "") -> User:
        """Insert a bare user row (no name, no password) for a first-time buyer."""
        u = User(first_name="", last_name="", email=email, phone=phone, password_hash="")
        self.db.add(u)
        self.db.flush()
        return u
