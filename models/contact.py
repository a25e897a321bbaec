from typing import Any

from pydantic import BaseModel, field_validator


class ContactFormDTO(BaseModel):
    name: str | None = None
    email: str | None = None
    message: str | None = None

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> str | None:
        # any non-empty value is accepted as text; empty ones count as missing
        if value is None or isinstance(value, str):
            return value
        if not value:
            return None
        return str(value)
