from sqlalchemy import Column, Integer, String

from app.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(128), nullable=False, default="")
    last_name = Column(String(128), nullable=False, default="")
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(64), nullable=True)
    password_hash = Column(String(255), nullable=False, default="")

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
