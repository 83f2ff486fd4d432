import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class NewsletterIn(BaseModel):
    email: str = Field("", validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize(cls, v):
        email = str(v or "").strip().lower()
        if not EMAIL_RE.match(email):
            raise PydanticCustomError("invalid_email", "Invalid email")
        return email
